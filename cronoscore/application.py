"""The application: owns the modules, the frame timing and the configuration file."""

from __future__ import annotations

import json
import logging
import time
import warnings
import webbrowser
from typing import Any, Callable

from cronoscore.module import Module, UpdateStatus
from cronoscore.rngen import RNGen
from cronoscore.timers import Clock, GameTimer, Timer, ticks

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "res/configuration/config.json"
# Seconds between automatic configuration saves until a configuration sets it.
DEFAULT_SAVE_TIME = 10.0


class Application:
    """Runs the modules in the order they were added and keeps frame timing.

    ``scene`` is the module that receives game time instead of real time;
    ``window``, when set, needs ``set_title(name)``.
    """

    def __init__(
        self,
        fps_cap: int = -1,
        *,
        config_path: str = DEFAULT_CONFIG_PATH,
        clock: Clock = ticks,
        sleep: Callable[[float], Any] = time.sleep,
        save_time: float = DEFAULT_SAVE_TIME,
        rng: RNGen | None = None,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self.modules: list[Module] = []
        self.scene: Module | None = None
        self.window: Any = None
        self.random_num_generator = rng if rng is not None else RNGen()

        self.game_timer = GameTimer(clock)
        self.game_timer_time = 0.0
        self.game_dt = 0.0

        self.slower_dt = False
        self.faster_dt = False
        self.next_frame_update = False

        self.gt_play = False
        self.gt_pause = False
        self.gt_stop = False
        self.gt_slower = False
        self.gt_faster = False
        self.gt_next_frame = False
        self.gt_save_scene = False

        self._timestep = 0.0
        self._last_frame_time = Timer(clock)
        self._starting_time = Timer(clock)
        self._last_sec_frame_time = Timer(clock)
        self._frame_count = 0
        self._last_sec_frame_count = 0
        self._prev_last_sec_frame_count = 0
        self._average_fps = 0.0

        self._capped_ms = -1
        self._fps_cap = fps_cap

        self.config: dict = {}
        self.must_load = True
        self.must_save = True
        self._save_timer = Timer(clock)
        self.save_time = save_time

        self.config_path = config_path
        self.app_name = ""
        self.app_version = ""
        self.app_organization = ""
        self.app_authors = ""

    # Read-only frame information -------------------------------------------
    @property
    def delta_time(self) -> float:
        return self._timestep

    @property
    def last_frame_ms(self) -> float:
        return self._timestep * 1000.0

    @property
    def frames_in_last_second(self) -> int:
        return self._prev_last_sec_frame_count

    @property
    def average_fps(self) -> float:
        return self._average_fps

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def fps_cap(self) -> int:
        return self._fps_cap

    @property
    def capped_ms(self) -> int:
        return self._capped_ms

    # Lifecycle ---------------------------------------------------------------
    def add_module(self, module: Module) -> None:
        """Append a module; modules init, start and update in this order."""
        self.modules.append(module)

    def on_init(self) -> bool:
        self.load_json_file(self.config_path)
        self._save_timer.start()

        ok = True
        for module in self.modules:
            logger.info("Initializing %s", module.name)
            if not module.on_init():
                ok = False
                break

        logger.info("-------------- Application Start --------------")
        if ok:
            for module in self.modules:
                if not module.on_start():
                    ok = False
                    break

        self._starting_time.start()
        self.game_timer.stop()
        return ok

    def prepare_update(self) -> None:
        timer = self.game_timer
        if self.gt_play:
            if timer.is_active and timer.is_paused:
                timer.play()
            else:
                timer.start()
                self.slower_dt = self.faster_dt = self.next_frame_update = False

        if self.gt_stop:
            timer.stop()
            self.slower_dt = self.faster_dt = self.next_frame_update = False

        if self.gt_pause:
            timer.pause()

        if self.gt_faster and timer.is_active:
            self.faster_dt = not self.faster_dt
        if self.gt_slower and timer.is_active:
            self.slower_dt = not self.slower_dt
        if self.gt_next_frame and timer.is_active:
            self.next_frame_update = not self.next_frame_update

        self.gt_play = self.gt_pause = self.gt_stop = False
        self.gt_slower = self.gt_faster = self.gt_next_frame = False
        self.gt_save_scene = False

        self.game_timer_time = timer.read_sec()

        self._frame_count += 1
        self._last_sec_frame_count += 1

        self._timestep = self._last_frame_time.read_sec()
        self.game_dt = self._timestep
        self._last_frame_time.start()

        if self.slower_dt:
            self.game_dt = self._timestep / 2.0
        if self.faster_dt:
            self.game_dt = self._timestep * 2.0
        if timer.is_active and timer.is_paused:
            self.game_dt = 0.0
        if self.next_frame_update and not timer.is_paused:
            self.game_dt = self._timestep
            self.next_frame_update = False

    def finish_update(self) -> None:
        if self.must_load:
            self.load_json_file(self.config_path)
        if self.must_save or self._save_timer.read_sec() > self.save_time:
            self.save_json_file(self.config_path)

        if self._last_sec_frame_time.read() > 1000:
            self._last_sec_frame_time.start()
            self._prev_last_sec_frame_count = self._last_sec_frame_count
            self._last_sec_frame_count = 0

        elapsed = self._starting_time.read_sec()
        if elapsed > 0:
            self._average_fps = self._frame_count / elapsed

        last_frame_ms = self._last_frame_time.read()
        if self._capped_ms > 0 and last_frame_ms < self._capped_ms:
            self._sleep((self._capped_ms - last_frame_ms) / 1000.0)

    def on_update(self) -> UpdateStatus:
        """Run one frame of pre-update, update and post-update on every module."""
        self.prepare_update()

        status = UpdateStatus.CONTINUE
        for module in self.modules:
            status = module.on_pre_update(self._timestep)
            if status is not UpdateStatus.CONTINUE:
                break
        if status is UpdateStatus.CONTINUE:
            for module in self.modules:
                dt = self.game_dt if module is self.scene else self._timestep
                status = module.on_update(dt)
                if status is not UpdateStatus.CONTINUE:
                    break
        if status is UpdateStatus.CONTINUE:
            for module in self.modules:
                status = module.on_post_update(self._timestep)
                if status is not UpdateStatus.CONTINUE:
                    break

        self.finish_update()
        return status

    def on_clean_up(self) -> bool:
        return all(module.on_clean_up() for module in self.modules)

    # Configuration -----------------------------------------------------------
    def load_engine_data(self) -> None:
        """Ask for the configuration to be reloaded at the end of the frame."""
        self.must_load = True

    def save_engine_data(self) -> None:
        """Ask for the configuration to be saved at the end of the frame."""
        self.must_save = True

    def load_json_file(self, path: str | None) -> None:
        if path is None:
            warnings.warn("unable to find path to load", RuntimeWarning, stacklevel=2)
            return
        try:
            with open(path, encoding="utf-8") as stream:
                config = json.load(stream)
        except OSError:
            warnings.warn(f"unable to open file to load: {path}", RuntimeWarning, stacklevel=2)
            return

        try:
            section = config["Application"]
            name = str(section["Name"])
            version = str(section["Version"])
            organization = str(section["Organization"])
            authors = str(section["Authors"])
            fps_cap = int(section["FPS Cap"])
            save_time = float(section["SaveTime"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"invalid application configuration in {path}: {exc}") from exc

        self.config = config
        self._fps_cap = fps_cap
        self.save_time = save_time

        self.set_fps_cap(fps_cap)
        self.set_app_title(name)
        self.app_version = version
        self.app_organization = organization
        self.app_authors = authors

        for module in self.modules:
            module.load_module_data(self.config)

        self.must_load = False

    def save_json_file(self, path: str | None) -> None:
        if path is None:
            warnings.warn("unable to find path to save", RuntimeWarning, stacklevel=2)
            return

        data: dict = {
            "Application": {
                "Name": self.app_name,
                "Version": self.app_version,
                "Organization": self.app_organization,
                "Authors": self.app_authors,
                "FPS Cap": self._fps_cap,
                "SaveTime": self.save_time,
            }
        }
        for module in self.modules:
            module.save_module_data(data)

        try:
            with open(path, "w", encoding="utf-8") as stream:
                stream.write(json.dumps(data, indent=2, sort_keys=True))
        except OSError:
            warnings.warn(f"unable to open file to save: {path}", RuntimeWarning, stacklevel=2)
            return

        self.config = data
        self.must_save = False
        self._save_timer.start()

    # Settings -----------------------------------------------------------------
    def request_browser(self, url: str) -> bool:
        """Open a web address in the system browser."""
        return webbrowser.open(url)

    def set_fps_cap(self, fps_cap: int) -> None:
        if fps_cap > 0:
            self._capped_ms = 1000 // fps_cap
            self._fps_cap = fps_cap
        else:
            logger.warning("FPS CAP must be bigger than 0!!")

    def set_app_title(self, name: str) -> None:
        self.app_name = name
        if self.window is not None:
            self.window.set_title(name)