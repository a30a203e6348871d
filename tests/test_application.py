import json
from unittest import mock

import pytest

from cronoscore.application import DEFAULT_CONFIG_PATH, Application
from cronoscore.module import Module, UpdateStatus


class FakeClock:
    def __init__(self):
        self.now = 0

    def __call__(self):
        return self.now


class Recorder(Module):
    def __init__(self, name, log, init_ok=True, start_ok=True, status=UpdateStatus.CONTINUE):
        super().__init__(None, name)
        self.log = log
        self.init_ok = init_ok
        self.start_ok = start_ok
        self.status = status
        self.dts = []

    def on_init(self):
        self.log.append(("init", self.name))
        return self.init_ok

    def on_start(self):
        self.log.append(("start", self.name))
        return self.start_ok

    def on_pre_update(self, dt):
        self.log.append(("pre", self.name))
        return UpdateStatus.CONTINUE

    def on_update(self, dt):
        self.log.append(("update", self.name))
        self.dts.append(dt)
        return self.status

    def on_post_update(self, dt):
        self.log.append(("post", self.name))
        return UpdateStatus.CONTINUE

    def on_clean_up(self):
        self.log.append(("clean", self.name))
        return True

    def save_module_data(self, data):
        data[self.name] = {"saved": True}

    def load_module_data(self, data):
        self.log.append(("load", data.get(self.name)))


class FakeWindow:
    def __init__(self):
        self.titles = []

    def set_title(self, name):
        self.titles.append(name)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def slept():
    return []


@pytest.fixture
def app(tmp_path, clock, slept):
    application = Application(
        config_path=str(tmp_path / "config.json"), clock=clock, sleep=slept.append
    )
    application.app_name = "Engine"
    application.save_json_file(application.config_path)
    application.load_json_file(application.config_path)
    return application


def test_default_config_path(clock):
    application = Application(clock=clock)
    assert DEFAULT_CONFIG_PATH == "res/configuration/config.json"
    assert application.config_path == DEFAULT_CONFIG_PATH


def test_save_and_load_round_trip(tmp_path, clock):
    path = str(tmp_path / "cfg.json")
    first = Application(config_path=path, clock=clock)
    first.set_app_title("Cronos")
    first.app_version = "v0.3"
    first.app_organization = "Studio"
    first.app_authors = "Someone"
    first.set_fps_cap(60)
    first.save_time = 7.5
    first.save_json_file(path)
    assert first.must_save is False

    second = Application(config_path=path, clock=clock)
    second.load_json_file(path)
    assert second.app_name == "Cronos"
    assert second.app_version == "v0.3"
    assert second.app_organization == "Studio"
    assert second.app_authors == "Someone"
    assert second.fps_cap == first.fps_cap
    assert second.capped_ms == first.capped_ms
    assert second.save_time == 7.5
    assert second.must_load is False
    assert second.config == first.config


def test_saved_file_uses_application_keys(app):
    with open(app.config_path, encoding="utf-8") as stream:
        data = json.load(stream)
    assert set(data["Application"]) == {
        "Name", "Version", "Organization", "Authors", "FPS Cap", "SaveTime"
    }
    assert data["Application"]["Name"] == "Engine"


def test_modules_take_part_in_serialization(app):
    log = []
    app.add_module(Recorder("Audio", log))
    app.save_json_file(app.config_path)
    app.load_json_file(app.config_path)
    assert app.config["Audio"] == {"saved": True}
    assert ("load", {"saved": True}) in log


def test_load_missing_file_warns_and_keeps_state(tmp_path, clock):
    application = Application(config_path=str(tmp_path / "none.json"), clock=clock)
    application.app_name = "kept"
    with pytest.warns(RuntimeWarning):
        application.load_json_file(application.config_path)
    assert application.app_name == "kept"
    assert application.must_load is True


def test_load_none_path_warns(app):
    with pytest.warns(RuntimeWarning):
        app.load_json_file(None)
    assert app.app_name == "Engine"


def test_save_into_missing_directory_warns(tmp_path, app):
    app.save_engine_data()
    with pytest.warns(RuntimeWarning):
        app.save_json_file(str(tmp_path / "missing" / "config.json"))
    assert app.must_save is True


def test_load_incomplete_configuration_raises(tmp_path, clock):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"Application": {"Name": "x"}}), encoding="utf-8")
    application = Application(config_path=str(path), clock=clock)
    with pytest.raises(ValueError):
        application.load_json_file(str(path))


def test_set_fps_cap_ignores_non_positive(app):
    app.set_fps_cap(50)
    before = (app.fps_cap, app.capped_ms)
    app.set_fps_cap(0)
    app.set_fps_cap(-5)
    assert (app.fps_cap, app.capped_ms) == before
    assert app.fps_cap == 50


def test_set_fps_cap_sets_frame_budget(app):
    app.set_fps_cap(50)
    assert app.capped_ms == 20


def test_set_app_title_updates_window(app):
    window = FakeWindow()
    app.window = window
    app.set_app_title("New Title")
    assert app.app_name == "New Title"
    assert window.titles == ["New Title"]


def test_on_init_runs_modules_in_order(app):
    log = []
    for name in ("Window", "Renderer", "Scene"):
        app.add_module(Recorder(name, log))
    assert app.on_init() is True
    order = [entry for entry in log if entry[0] in ("init", "start")]
    assert order == [
        ("init", "Window"), ("init", "Renderer"), ("init", "Scene"),
        ("start", "Window"), ("start", "Renderer"), ("start", "Scene"),
    ]
    assert app.game_timer.is_active is False


def test_on_init_stops_at_first_failure(app):
    log = []
    app.add_module(Recorder("A", log))
    app.add_module(Recorder("B", log, init_ok=False))
    app.add_module(Recorder("C", log))
    assert app.on_init() is False
    calls = [entry for entry in log if entry[0] in ("init", "start")]
    assert calls == [("init", "A"), ("init", "B")]


def test_on_init_reports_start_failure(app):
    log = []
    app.add_module(Recorder("A", log, start_ok=False))
    app.add_module(Recorder("B", log))
    assert app.on_init() is False
    assert ("start", "B") not in log


def test_on_update_runs_phases_in_order(app):
    log = []
    app.add_module(Recorder("A", log))
    app.add_module(Recorder("B", log))
    assert app.on_update() is UpdateStatus.CONTINUE
    phases = [entry for entry in log if entry[0] in ("pre", "update", "post")]
    assert phases == [
        ("pre", "A"), ("pre", "B"), ("update", "A"), ("update", "B"),
        ("post", "A"), ("post", "B"),
    ]


def test_on_update_stops_when_a_module_stops(app):
    log = []
    app.add_module(Recorder("A", log, status=UpdateStatus.STOP))
    app.add_module(Recorder("B", log))
    assert app.on_update() is UpdateStatus.STOP
    assert ("update", "B") not in log
    assert not any(entry[0] == "post" for entry in log)


def test_scene_receives_game_time(app, clock):
    log = []
    scene = Recorder("Scene", log)
    other = Recorder("Other", log)
    app.add_module(other)
    app.add_module(scene)
    app.scene = scene
    app.gt_pause = True
    clock.now = 100
    app.on_update()
    assert scene.dts == [0.0]
    assert other.dts == [pytest.approx(app.delta_time)]
    assert app.delta_time > 0


def test_prepare_update_speed_controls(app, clock):
    clock.now = 100
    app.prepare_update()
    assert app.game_dt == pytest.approx(app.delta_time)

    app.gt_faster = True
    clock.now = 200
    app.prepare_update()
    assert app.faster_dt is True
    assert app.game_dt == pytest.approx(2 * app.delta_time)

    app.gt_faster = True
    app.gt_slower = True
    clock.now = 300
    app.prepare_update()
    assert app.faster_dt is False
    assert app.game_dt == pytest.approx(app.delta_time / 2)
    assert app.gt_faster is False and app.gt_slower is False


def test_prepare_update_pause_play_stop(app, clock):
    app.gt_pause = True
    clock.now = 100
    app.prepare_update()
    assert app.game_timer.is_paused is True
    assert app.game_dt == 0.0

    app.gt_play = True
    clock.now = 200
    app.prepare_update()
    assert app.game_timer.is_paused is False
    assert app.game_dt == pytest.approx(app.delta_time)

    app.gt_stop = True
    clock.now = 300
    app.prepare_update()
    assert app.game_timer.is_active is False
    assert app.game_timer_time == 0.0


def test_prepare_update_counts_frames(app, clock):
    for step in (10, 20, 30):
        clock.now = step
        app.prepare_update()
    assert app.frame_count == 3
    assert app.last_frame_ms == pytest.approx(app.delta_time * 1000.0)


def test_finish_update_sleeps_up_to_cap(app, slept):
    app.set_fps_cap(50)
    app.prepare_update()
    app.finish_update()
    assert slept == [pytest.approx(app.capped_ms / 1000.0)]


def test_finish_update_without_cap_never_sleeps(app, slept):
    app.prepare_update()
    app.finish_update()
    assert app.capped_ms <= 0
    assert app.frame_count == 1
    assert len(slept) == 0


def test_finish_update_saves_after_save_time(app, clock):
    app.app_name = "changed"
    clock.now = int(app.save_time * 1000) + 1
    app.finish_update()
    with open(app.config_path, encoding="utf-8") as stream:
        assert json.load(stream)["Application"]["Name"] == "changed"


def test_finish_update_honours_save_request(app):
    app.app_name = "requested"
    app.save_engine_data()
    assert app.must_save is True
    app.finish_update()
    assert app.must_save is False
    assert app.config["Application"]["Name"] == "requested"


def test_finish_update_honours_load_request(app):
    with open(app.config_path, encoding="utf-8") as stream:
        data = json.load(stream)
    data["Application"]["Version"] = "v9"
    with open(app.config_path, "w", encoding="utf-8") as stream:
        json.dump(data, stream)
    app.load_engine_data()
    app.finish_update()
    assert app.app_version == "v9"
    assert app.must_load is False


def test_frames_in_last_second_and_average(app, clock):
    app.prepare_update()
    clock.now = 1500
    app.finish_update()
    assert app.frames_in_last_second == 1
    assert app.average_fps == pytest.approx(1 / 1.5)


def test_on_clean_up_calls_every_module(app):
    log = []
    app.add_module(Recorder("A", log))
    app.add_module(Recorder("B", log))
    assert app.on_clean_up() is True
    assert [entry for entry in log if entry[0] == "clean"] == [("clean", "A"), ("clean", "B")]


def test_request_browser_opens_url(app):
    with mock.patch("webbrowser.open", return_value=True) as opener:
        assert app.request_browser("https://example.com") is True
    opener.assert_called_once_with("https://example.com")