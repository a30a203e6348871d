"""Perspective camera with a view frustum."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from cronoscore.geometry import AABB
from cronoscore.linalg import normalize, quat_to_matrix

MIN_FOV = 15.0
MAX_FOV = 120.0

_WORLD_UP = np.array([0.0, 1.0, 0.0])

# Corner indices of each frustum face: near, far, left, right, bottom, top.
_FACES = (
    (0, 2, 4, 6),
    (1, 3, 5, 7),
    (0, 1, 2, 3),
    (4, 5, 6, 7),
    (0, 1, 4, 5),
    (2, 3, 6, 7),
)


def _vec3(v) -> np.ndarray:
    a = np.array(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {a.shape}")
    return a


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed projection matrix mapping depth to [-1, 1]; fov_y in radians."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(fov_y / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = -(far + near) / (far - near)
    m[2, 3] = -(2.0 * far * near) / (far - near)
    m[3, 2] = -1.0
    return m


def look_at_matrix(eye, target, up) -> np.ndarray:
    """Right-handed view matrix looking from eye towards target."""
    eye = _vec3(eye)
    f = normalize(_vec3(target) - eye)
    s = normalize(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    m = np.eye(4)
    m[0, :3] = s
    m[1, :3] = u
    m[2, :3] = -f
    m[0, 3] = -np.dot(s, eye)
    m[1, 3] = -np.dot(u, eye)
    m[2, 3] = np.dot(f, eye)
    return m


@dataclass
class Frustum:
    """Perspective view frustum; fields of view are in radians."""

    pos: np.ndarray = field(default_factory=lambda: np.zeros(3))
    front: np.ndarray = field(default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    near_plane_distance: float = 1.0
    far_plane_distance: float = 100.0
    vertical_fov: float = math.radians(60.0)
    horizontal_fov: float = math.radians(60.0)

    @property
    def right(self) -> np.ndarray:
        return normalize(np.cross(self.front, self.up))

    def transform(self, q) -> None:
        """Rotate position, front and up by a quaternion (w, x, y, z)."""
        r = quat_to_matrix(q)[:3, :3]
        self.pos = r @ self.pos
        self.front = r @ self.front
        self.up = r @ self.up

    def corner_points(self) -> np.ndarray:
        """Eight corners; bit 2 of the index picks right, bit 1 top, bit 0 far."""
        right = self.right
        tan_h = math.tan(self.horizontal_fov / 2.0)
        tan_v = math.tan(self.vertical_fov / 2.0)
        corners = []
        for i in range(8):
            d = self.far_plane_distance if i & 1 else self.near_plane_distance
            hw, hh = tan_h * d, tan_v * d
            point = (
                self.pos
                + self.front * d
                + right * (hw if i & 4 else -hw)
                + self.up * (hh if i & 2 else -hh)
            )
            corners.append(point)
        return np.array(corners)

    def intersects_aabb(self, box: AABB) -> bool:
        """False only when the box lies wholly outside one of the six planes."""
        if np.any(box.min_point > box.max_point):
            return False
        corners = self.corner_points()
        center = corners.mean(axis=0)
        box_corners = box.corners()
        for face in _FACES:
            a, b, c = corners[face[0]], corners[face[1]], corners[face[2]]
            normal = np.cross(b - a, c - a)
            if np.dot(normal, center - a) > 0:
                normal = -normal
            if np.all((box_corners - a) @ normal > 0):
                return False
        return True


class CameraMovement(Enum):
    NONE = -1
    FORWARD = 0
    BACKWARDS = 1
    RIGHT = 2
    LEFT = 3
    UP = 4
    DOWN = 5


class Camera:
    """Camera orbiting a target, with view and projection matrices and a frustum."""

    def __init__(self) -> None:
        self._aspect_ratio = np.array([1.6, 0.9])
        self._near = 1.0
        self._far = 100.0
        self._fov = 60.0

        self.orientation = np.array([1.0, 0.0, 0.0, 0.0])
        self.view_matrix = np.eye(4)
        self.projection_matrix = np.eye(4)

        self.position = np.array([0.0, 3.0, 5.0])
        self.target = np.zeros(3)
        self.up = _WORLD_UP.copy()
        self.right = np.array([1.0, 0.0, 0.0])
        self.front = np.array([0.0, 0.0, 1.0])

        self.frustum = Frustum()

        self.speed_multiplicator = 1.0
        self.scroll_speed = 3.5
        self.move_speed = 10.0
        self.focus_distance = 20.0

        self.look(self.position, self.target, True)

    @property
    def aspect_ratio(self) -> np.ndarray:
        return self._aspect_ratio.copy()

    @property
    def near_plane(self) -> float:
        return self._near

    @property
    def far_plane(self) -> float:
        return self._far

    @property
    def fov(self) -> float:
        """Vertical field of view in degrees."""
        return self._fov

    def look(self, pos, target, rotate_around_reference: bool = False) -> None:
        self.position = _vec3(pos)
        self.target = _vec3(target)
        self._orient()
        if not rotate_around_reference:
            self.target = self.position.copy()
            self.position = self.position + self.front * 0.005
        self.recalculate()

    def look_at(self, spot) -> None:
        self.target = _vec3(spot)
        self._orient()
        self.recalculate()

    def _orient(self) -> None:
        self.front = normalize(self.position - self.target)
        self.right = normalize(np.cross(_WORLD_UP, self.front))
        self.up = np.cross(self.front, self.right)

    def move(self, direction: CameraMovement, speed_up: bool, dt: float) -> None:
        speed = self.move_speed * self.speed_multiplicator
        if speed_up:
            speed *= 2.0
        step = speed * dt
        offsets = {
            CameraMovement.FORWARD: -self.front,
            CameraMovement.BACKWARDS: self.front,
            CameraMovement.LEFT: -self.right,
            CameraMovement.RIGHT: self.right,
            CameraMovement.UP: self.up,
            CameraMovement.DOWN: -self.up,
        }
        movement = offsets.get(direction, np.zeros(3)) * step
        self.position = self.position + movement
        self.target = self.target + movement

    def zoom(self, z_movement: int, dt: float) -> None:
        """Step towards the target for positive movement, away otherwise."""
        offset = self.scroll_speed * self.front
        movement = -offset if z_movement > 0 else offset
        self.position = self.position + movement
        self.target = self.target + movement

    def panning(self, x_movement: float, y_movement: float, dt: float) -> None:
        x_offset = x_movement * (self.move_speed / 3.0) * dt
        y_offset = y_movement * (self.move_speed / 3.0) * dt
        movement = -self.right * x_offset + self.up * y_offset
        self.position = self.position + movement
        self.target = self.target + movement

    def focus(self, aabb: AABB | None = None) -> None:
        """Frame a bounding box, or look at the origin when none is given."""
        if aabb is None:
            self.look_at(np.zeros(3))
            return
        center = aabb.center()
        size = aabb.size() * 1.5
        pos = np.array([center[0] * size[0], center[1] + 1.5, center[2] * size[2]])
        pos = pos + self.front * 6.0
        ref = np.array([center[0], center[1] + 0.5, center[2] + 0.5])
        self.look(pos, ref, True)

    def _clamp_fov(self) -> None:
        self._fov = min(max(self._fov, MIN_FOV), MAX_FOV)

    def _aspect(self) -> float:
        return float(self._aspect_ratio[0] / self._aspect_ratio[1])

    def _update_frustum(self, rotation) -> None:
        frustum = self.frustum
        frustum.pos = self.position.copy()
        frustum.front = -self.front
        frustum.up = self.up.copy()
        frustum.transform(rotation)
        frustum.near_plane_distance = self._near
        frustum.far_plane_distance = self._far
        fov_rad = math.radians(self._fov)
        frustum.vertical_fov = fov_rad
        frustum.horizontal_fov = 2.0 * math.atan(math.tan(fov_rad * 0.5) * self._aspect())

    def recalculate(self) -> None:
        self.view_matrix = look_at_matrix(self.position, self.target, self.up)
        self._clamp_fov()
        self.projection_matrix = perspective(
            math.radians(self._fov), self._aspect(), self._near, self._far
        )
        self._update_frustum(self.orientation)

    def set_fov(self, fov: float) -> None:
        self._fov = float(fov)
        self.recalculate()

    def set_near_plane(self, near: float) -> None:
        self._near = float(near)
        self.recalculate()

    def set_far_plane(self, far: float) -> None:
        self._far = float(far)
        self.recalculate()

    def set_aspect_ratio(self, aspect_ratio) -> None:
        ratio = np.array(aspect_ratio, dtype=float)
        if ratio.shape != (2,):
            raise ValueError(f"expected a 2-vector, got shape {ratio.shape}")
        if ratio[1] == 0:
            raise ValueError("aspect ratio height must not be zero")
        self._aspect_ratio = ratio
        self.recalculate()

    def frustum_corners(self) -> np.ndarray:
        return self.frustum.corner_points()