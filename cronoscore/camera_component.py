"""Camera attached to a game object and driven by its transform."""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np

from cronoscore.camera import Camera
from cronoscore.component import Component, ComponentType
from cronoscore.linalg import quat_multiply, quat_to_matrix, translate_matrix
from cronoscore.camera import perspective


def _axis_angle(axis, angle: float) -> np.ndarray:
    half = angle / 2.0
    return np.concatenate(([math.cos(half)], np.asarray(axis, dtype=float) * math.sin(half)))


def _transform_of(game_object: Any):
    for comp in game_object.components:
        if comp.component_type is ComponentType.TRANSFORM:
            return comp
    return None


class CameraComponent(Component, Camera):
    """A camera that follows the position and orientation of its game object.

    ``frustum_drawer``, when set, is called with the frustum corners on every
    update.
    """

    TYPE = ComponentType.CAMERA

    def __init__(
        self,
        parent: Any,
        frustum_drawer: Callable[[np.ndarray], None] | None = None,
    ) -> None:
        Component.__init__(self, ComponentType.CAMERA, parent)
        self._attached = False
        Camera.__init__(self)
        self._attached = True
        self.frustum_drawer = frustum_drawer

    def update(self, dt: float) -> None:
        self.recalculate()
        if self.frustum_drawer is not None:
            self.frustum_drawer(self.frustum_corners())

    def recalculate(self) -> None:
        if not self._attached:
            Camera.recalculate(self)
            return
        transform = _transform_of(self.parent)
        if transform is None:
            raise ValueError("camera owner has no transform component")

        self.position = transform.translation
        cam_transform = translate_matrix(self.position) @ quat_to_matrix(self.orientation)
        self.view_matrix = np.linalg.inv(cam_transform)

        self._clamp_fov()
        self.projection_matrix = perspective(
            math.radians(self.fov), self._aspect(), self.near_plane, self.far_plane
        )

        ex, ey, ez = np.radians(transform.orientation)
        rotation = quat_multiply(
            quat_multiply(_axis_angle((1, 0, 0), ex), _axis_angle((0, 1, 0), ey)),
            _axis_angle((0, 0, 1), ez),
        )
        self._update_frustum(rotation)