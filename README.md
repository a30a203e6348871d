# cronoscore

The core of a small 3D game engine. It holds the parts that need no window
and no graphics card. These are the application loop, the scene objects and
their components, camera maths, spatial partitioning, timers and random
numbers.

## What is in it

- `cronoscore.application.Application` runs an ordered list of modules
  (subclasses of `cronoscore.module.Module`). Each module goes through
  `on_init`, `on_start`, `on_pre_update`, `on_update`, `on_post_update` and
  `on_clean_up`.
  - An update step returns a `cronoscore.module.UpdateStatus`: `CONTINUE`,
    `STOP` or `ERROR`.
  - The module set as `Application.scene` gets game time instead of real time.
    The game clock is a `cronoscore.timers.GameTimer`. You drive it through the
    flags `gt_play`, `gt_pause`, `gt_stop`, `gt_slower`, `gt_faster` and
    `gt_next_frame`. Each flag is acted on at the start of the next frame.
  - `set_fps_cap` sets a frame-rate limit. When a limit is set, the loop sleeps
    out the rest of each frame.
  - The settings (`Name`, `Version`, `Organization`, `Authors`, `FPS Cap`,
    `SaveTime`) are kept in the `Application` section of a JSON file. They are
    read by `load_json_file` and written by `save_json_file`. Each module
    contributes through `save_module_data` and `load_module_data`. The file is
    saved again once `save_time` seconds have passed.
- `cronoscore.main.run(app)` drives an application. It inits the application,
  then updates it until a module returns `STOP` or `ERROR`, then cleans up. It
  returns 0 on success and 1 on failure.
- `cronoscore.game_object.GameObject` is an object in a scene graph. It has a
  `TransformComponent` and can create mesh, camera and light components with
  `create_component`.
  - `set_parent` re-parents an object and keeps its world position.
  - `set_new_id` draws fresh ids for the object and its descendants from an
    `RNGen`.
  - The object keeps an `aabb` and an oriented box `oobb` that follow its
    transform.
- Components:
  - `cronoscore.transform_component.TransformComponent` holds position,
    orientation and scale, plus local and global matrices. When it has a tree,
    it re-inserts its object into that octree after every change.
  - `cronoscore.mesh_component.MeshComponent` holds `CronosVertex` vertices and
    triangle indices. It returns debug lines for vertex normals, face normals
    and the central axis.
  - `cronoscore.camera_component.CameraComponent` is a camera that follows its
    object's transform.
  - `cronoscore.light_component.LightComponent` is a directional, point or spot
    light. Each light is kept in a `LightRegistry` under its type.
    `light_uniform` gives the name of the shader array for a light type.
- `cronoscore.camera.Camera` is a free-look camera with `look`, `look_at`,
  `move`, `zoom`, `panning` and `focus`. It builds view and projection matrices
  and a `Frustum`. The module also provides `perspective` and `look_at_matrix`.
- `cronoscore.octree.Octree` partitions space into axis-aligned boxes
  (`cronoscore.geometry.AABB`). `objects_in` accepts an `AABB`, or any volume
  with an `intersects_aabb` method, such as a camera's `frustum`.
- `cronoscore.linalg` has vector, quaternion and 4x4 matrix helpers, including
  `decompose`.
- `cronoscore.timers` provides `Timer` (milliseconds), `GameTimer` (can be
  paused and stopped) and `PerfTimer` (high resolution).
- `cronoscore.rngen.RNGen` generates random integers and doubles.
- `cronoscore.color.Color` is an RGBA colour. The module also defines the
  constants `RED`, `GREEN`, `BLUE`, `BLACK` and `WHITE`.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## The command

```
cronoscore --config res/configuration/config.json --fps-cap 60
```

The command creates an `Application` and hands it to `run`.

- `--config` gives the configuration file. Its default is
  `res/configuration/config.json`.
- `--fps-cap` gives the frame-rate limit. Its default is -1, which means no
  limit.

The application that the command builds has no modules, so no module ever
asks the loop to stop. The command runs until it is interrupted. It reports
its progress through the `logging` module.

## Examples

Driving the loop with your own module:

```python
from cronoscore.application import Application
from cronoscore.main import run
from cronoscore.module import Module, UpdateStatus


class StopAfter(Module):
    def __init__(self, app, frames):
        super().__init__(app, "StopAfter")
        self.frames = frames

    def on_update(self, dt):
        self.frames -= 1
        return UpdateStatus.STOP if self.frames <= 0 else UpdateStatus.CONTINUE


app = Application(config_path="config.json")
app.add_module(StopAfter(app, 3))
exit_code = run(app)
```

Querying an octree:

```python
from types import SimpleNamespace

from cronoscore.geometry import AABB
from cronoscore.octree import Octree

tree = Octree(AABB((-10, -10, -10), (10, 10, 10)), 2)
box = SimpleNamespace(aabb=AABB((1, 1, 1), (2, 2, 2)))
tree.insert(box)
tree.objects_in(AABB((0, 0, 0), (3, 3, 3)))  # [box]
```

Anything you insert into the tree must have an `aabb` attribute, as game
objects do.

## What it does not do

There is no window, renderer, input, audio, scene or resource module. Nothing
here draws on screen.

- Mesh, camera and bounding-box drawing goes through objects or callables that
  you supply: a `renderer`, a `frustum_drawer` or a `bounding_box_drawer`.
- There is no material component. `GameObject.create_component` returns `None`
  for material and mesh-renderer types.
- There are no primitive-shape generators.
- Meshes are not loaded from or saved to files.