"""Game objects: named holders of components arranged in a hierarchy."""

from __future__ import annotations

import os
from typing import Any, Callable

import numpy as np

from cronoscore.camera_component import CameraComponent
from cronoscore.component import Component, ComponentType
from cronoscore.geometry import AABB
from cronoscore.light_component import LightComponent, LightRegistry
from cronoscore.linalg import decompose, quat_to_euler
from cronoscore.mesh_component import MeshComponent
from cronoscore.rngen import RNGen
from cronoscore.transform_component import TransformComponent

BOX_COLOR = (0.93, 0.93, 0.93)
SELECTED_BOX_COLOR = (0.87, 0.83, 0.04)
BOX_LINE_WIDTH = 1.2

BoxDrawer = Callable[[np.ndarray, np.ndarray, tuple, float], None]


class GameObject:
    """An object in the scene with a transform, components and children.

    ``tree`` is an octree the object is kept in as it moves; ``renderer`` is
    handed to mesh components; ``bounding_box_drawer``, when set, is called
    on update with the box's max point, min point, colour and line width.
    """

    def __init__(
        self,
        name: str,
        game_object_id: int,
        path: str,
        start_enabled: bool = True,
        position=(0.0, 0.0, 0.0),
        rotation=(0.0, 0.0, 0.0),
        scale=(1.0, 1.0, 1.0),
        *,
        meta_dir: str = "",
        tree: Any = None,
        renderer: Any = None,
        light_registry: LightRegistry | None = None,
    ) -> None:
        self.name = name
        self.path = path
        self.active = start_enabled
        self.meta_dir = meta_dir
        self.tree = tree
        self.renderer = renderer
        self.light_registry = light_registry if light_registry is not None else LightRegistry()
        self._id = int(game_object_id)

        self.parent: GameObject | None = None
        self.children: list[GameObject] = []
        self.components: list[Component] = []

        self.is_primitive = False
        self.has_vertices = False
        self.selected = False
        self.bounding_box_drawer: BoxDrawer | None = None

        self.initial_aabb = AABB.negative_infinity()
        self.aabb = AABB.negative_infinity()
        self.oobb = np.empty((0, 3))

        transform = self.create_component(ComponentType.TRANSFORM)
        transform.set_position(position)
        transform.set_orientation(rotation)
        transform.set_scale(scale)
        self.components.append(transform)
        self.meta_path = self._meta_path_for(self._id)

    def _meta_path_for(self, game_object_id: int) -> str:
        return f"{self.meta_dir}{game_object_id}.model"

    @property
    def game_object_id(self) -> int:
        return self._id

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def transform(self) -> TransformComponent:
        return self.get_component(TransformComponent)

    def update(self, dt: float) -> None:
        if not self.active:
            return
        for comp in list(self.components):
            comp.update(dt)
        for child in list(self.children):
            child.update(dt)
        if self.bounding_box_drawer is not None:
            color = SELECTED_BOX_COLOR if self.selected else BOX_COLOR
            self.bounding_box_drawer(
                self.aabb.max_point.copy(), self.aabb.min_point.copy(), color, BOX_LINE_WIDTH
            )

    def enable(self) -> None:
        if self.active:
            return
        self.active = True
        for comp in self.components:
            if not comp.is_enabled:
                comp.enable()

    def disable(self) -> None:
        if not self.active:
            return
        self.active = False
        for comp in self.components:
            if comp.is_enabled:
                comp.disable()

    def clean_up(self) -> None:
        self.components.clear()
        self.children.clear()

    def create_component(self, component_type: ComponentType) -> Component | None:
        """A new component of the given type, not yet attached; None for types without one."""
        if component_type is ComponentType.TRANSFORM:
            return TransformComponent(self, tree=self.tree)
        if component_type is ComponentType.MESH:
            return MeshComponent(self, self.renderer)
        if component_type is ComponentType.CAMERA:
            return CameraComponent(self)
        if component_type is ComponentType.LIGHT:
            return LightComponent(self, self.light_registry)
        return None

    def get_component(self, component_class: type) -> Any:
        wanted = component_class.TYPE
        for comp in self.components:
            if comp.component_type is wanted:
                return comp
        return None

    def set_new_id(self, rng: RNGen) -> None:
        """Draw a fresh id for this object and all its descendants."""
        self._id = rng.int_rn()
        self.meta_path = self._meta_path_for(self._id)
        for child in self.children:
            child.set_new_id(rng)

    def set_meta(self, meta: str) -> None:
        self.meta_path = self.path + meta

    def set_parent(self, parent: GameObject | None) -> None:
        """Re-parent while keeping the object where it is in world space."""
        transform = self.transform
        if transform is None:
            raise ValueError("game object has no transform component")
        if parent is None:
            local = transform.global_matrix
        else:
            parent_transform = parent.transform
            if parent_transform is None:
                raise ValueError("parent has no transform component")
            local = np.linalg.inv(parent_transform.global_matrix) @ transform.global_matrix

        parts = decompose(local)
        self.parent = parent
        transform.set_position(parts.translation)
        transform.set_scale(parts.scale)
        transform.set_orientation(np.degrees(quat_to_euler(parts.rotation)))

    def break_parent(self) -> None:
        self.set_parent(None)

    def set_oobb_transform(self, matrix) -> None:
        """Place the oriented box (its eight corners) and derive the AABB from it."""
        m = np.asarray(matrix, dtype=float)
        if m.shape != (4, 4):
            raise ValueError(f"expected a 4x4 matrix, got shape {m.shape}")
        initial = self.initial_aabb
        if np.any(initial.min_point > initial.max_point):
            self.oobb = np.empty((0, 3))
            self.aabb = AABB.negative_infinity()
            return
        corners = initial.corners() @ m[:3, :3].T + m[:3, 3]
        self.oobb = corners
        self.aabb = AABB.from_points(corners)

    def has_meta(self) -> bool:
        return os.path.exists(self.meta_path)