"""Mesh geometry attached to a game object."""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Sequence

import numpy as np

from cronoscore.color import BLUE, GREEN
from cronoscore.component import Component, ComponentType


def _array(v, size: int) -> np.ndarray:
    a = np.array(v, dtype=float)
    if a.shape != (size,):
        raise ValueError(f"expected {size} components, got shape {a.shape}")
    return a


@dataclass
class CronosVertex:
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    tex_coords: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        self.position = _array(self.position, 3)
        self.normal = _array(self.normal, 3)
        self.tex_coords = _array(self.tex_coords, 2)


class Line(NamedTuple):
    start: np.ndarray
    end: np.ndarray
    color: tuple[float, float, float]
    width: float


class MeshComponent(Component):
    """Vertices and triangle indices of a game object.

    ``renderer``, when given, needs ``render_submit(game_object)`` and
    ``draw_line(start, end, color, width)``.
    """

    TYPE = ComponentType.MESH

    def __init__(self, parent: Any, renderer: Any = None) -> None:
        super().__init__(ComponentType.MESH, parent)
        self.renderer = renderer
        self.vertices: list[CronosVertex] = []
        self.indices: list[int] = []
        self.r_mesh: Any = None
        self.debug_draw = False
        self.draw_axis = False
        self._set_up = False

    def setup_mesh(self, vertices: Sequence[CronosVertex], indices: Sequence[int]) -> None:
        if not vertices:
            raise ValueError("a mesh needs at least one vertex")
        if not indices:
            raise ValueError("a mesh needs at least one index")
        if self._set_up:
            warnings.warn("mesh buffers are being set up again", RuntimeWarning, stacklevel=2)
        self.vertices = list(vertices)
        self.indices = [int(i) for i in indices]
        self._set_up = True

    @property
    def vertex_buffer(self) -> np.ndarray:
        """Interleaved position, normal and texture coordinates, one row per vertex."""
        return np.array(
            [np.concatenate((v.position, v.normal, v.tex_coords)) for v in self.vertices],
            dtype=np.float32,
        ).reshape(-1, 8)

    @property
    def index_buffer(self) -> np.ndarray:
        return np.array(self.indices, dtype=np.uint32)

    def update(self, dt: float) -> None:
        if not self.is_enabled:
            return
        if self.renderer is None:
            return
        self.renderer.render_submit(self.parent)
        lines: list[Line] = []
        if self.debug_draw:
            lines += self.vertex_normal_lines()
            lines += self.plane_normal_lines()
        if self.draw_axis:
            lines += self.central_axis_lines()
        for line in lines:
            self.renderer.draw_line(line.start, line.end, line.color, line.width)

    def vertex_normal_lines(self) -> list[Line]:
        color = (BLUE.r, BLUE.g, BLUE.b)
        return [
            Line(v.position.copy(), v.position + v.normal * 0.2, color, 2.0)
            for v in self.vertices
        ]

    def plane_normal_lines(self) -> list[Line]:
        """One line per triangle, from its centre along its face normal."""
        color = (GREEN.r, GREEN.g, GREEN.b)
        lines = []
        for i in range(0, len(self.indices) - 2, 3):
            p1, p2, p3 = (self.vertices[j].position for j in self.indices[i:i + 3])
            normal = np.cross(p2 - p1, p3 - p1)
            length = float(np.linalg.norm(normal))
            if length == 0.0:
                continue
            normal = normal / length * 0.5
            center = (p1 + p2 + p3) / 3.0
            lines.append(Line(center, center + normal, color, 2.0))
        return lines

    def central_axis_lines(self) -> list[Line]:
        origin = np.zeros(3)
        return [
            Line(origin.copy(), np.eye(3)[axis], tuple(np.eye(3)[axis]), 2.0)
            for axis in range(3)
        ]