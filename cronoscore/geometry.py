"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _point(v) -> np.ndarray:
    a = np.asarray(v, dtype=float)
    if a.shape != (3,):
        raise ValueError(f"expected a 3D point, got shape {a.shape}")
    return a


@dataclass(eq=False)
class AABB:
    """Box spanned by min_point and max_point."""

    min_point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    max_point: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self) -> None:
        self.min_point = _point(self.min_point).copy()
        self.max_point = _point(self.max_point).copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AABB):
            return NotImplemented
        return bool(
            np.array_equal(self.min_point, other.min_point)
            and np.array_equal(self.max_point, other.max_point)
        )

    @classmethod
    def negative_infinity(cls) -> "AABB":
        """An empty box that any enclosed point or box replaces."""
        return cls(np.full(3, np.inf), np.full(3, -np.inf))

    @classmethod
    def from_points(cls, points) -> "AABB":
        box = cls.negative_infinity()
        box.enclose(np.asarray(points, dtype=float).reshape(-1, 3))
        return box

    @property
    def _is_empty(self) -> bool:
        return bool(np.any(self.min_point > self.max_point))

    def intersects(self, other: "AABB") -> bool:
        """True when the interiors overlap; touching faces do not count."""
        return bool(
            np.all(self.min_point < other.max_point)
            and np.all(other.min_point < self.max_point)
        )

    def contains(self, other) -> bool:
        """True when a box or a point lies entirely inside this box."""
        if isinstance(other, AABB):
            return bool(
                np.all(other.min_point >= self.min_point)
                and np.all(other.max_point <= self.max_point)
            )
        p = _point(other)
        return bool(np.all(p >= self.min_point) and np.all(p <= self.max_point))

    def enclose(self, other) -> None:
        """Grow this box to hold a box, a point or an (n, 3) array of points."""
        if isinstance(other, AABB):
            if other._is_empty:
                return
            lo, hi = other.min_point, other.max_point
        else:
            pts = np.asarray(other, dtype=float)
            if pts.ndim == 1:
                pts = _point(pts).reshape(1, 3)
            elif pts.ndim != 2 or pts.shape[1] != 3:
                raise ValueError(f"expected points of shape (n, 3), got {pts.shape}")
            if len(pts) == 0:
                return
            lo, hi = pts.min(axis=0), pts.max(axis=0)
        self.min_point = np.minimum(self.min_point, lo)
        self.max_point = np.maximum(self.max_point, hi)

    def center(self) -> np.ndarray:
        return (self.min_point + self.max_point) / 2.0

    def size(self) -> np.ndarray:
        return self.max_point - self.min_point

    def corners(self) -> np.ndarray:
        """The eight corners; bit 2 of the index picks x, bit 1 y, bit 0 z."""
        lo, hi = self.min_point, self.max_point
        return np.array([
            [hi[0] if i & 4 else lo[0], hi[1] if i & 2 else lo[1], hi[2] if i & 1 else lo[2]]
            for i in range(8)
        ])

    def transformed(self, matrix) -> "AABB":
        """The box that encloses this box after an affine transform."""
        if self._is_empty:
            return AABB.negative_infinity()
        m = np.asarray(matrix, dtype=float)
        if m.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
        pts = self.corners() @ m[:3, :3].T + m[:3, 3]
        return AABB.from_points(pts)