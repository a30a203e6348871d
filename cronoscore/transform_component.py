"""Position, orientation and scale of a game object."""

from __future__ import annotations

from typing import Any

import numpy as np

from cronoscore.component import Component, ComponentType
from cronoscore.geometry import AABB
from cronoscore.linalg import (
    quat_from_euler,
    quat_multiply,
    quat_to_matrix,
    scale_matrix,
    translate_matrix,
)


def _transform_of(game_object: Any) -> "TransformComponent | None":
    for comp in game_object.components:
        if comp.component_type is ComponentType.TRANSFORM:
            return comp
    return None


def _has_mesh(game_object: Any) -> bool:
    return any(c.component_type is ComponentType.MESH for c in game_object.components)


class TransformComponent(Component):
    """Local and global transformation of the game object it is attached to.

    The owner is expected to expose ``parent``, ``children``, ``components``,
    ``aabb``, ``oobb`` and ``set_oobb_transform(matrix)``. When a ``tree`` is
    given, the owner is re-inserted into it whenever the transform changes.
    """

    TYPE = ComponentType.TRANSFORM

    def __init__(self, parent: Any, active: bool = True, tree: Any = None) -> None:
        super().__init__(ComponentType.TRANSFORM, parent, active)
        self.tree = tree
        self._euler = np.zeros(3)
        self._orientation = np.array([1.0, 0.0, 0.0, 0.0])
        self._scale = np.zeros(3)
        self._translation = np.zeros(3)
        self._local = np.eye(4)
        self._global = np.eye(4)
        self.update_transform()

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @property
    def orientation(self) -> np.ndarray:
        """Euler angles in degrees."""
        return np.degrees(self._euler)

    @property
    def orientation_quaternion(self) -> np.ndarray:
        return self._orientation.copy()

    @property
    def local_matrix(self) -> np.ndarray:
        return self._local.copy()

    @property
    def global_matrix(self) -> np.ndarray:
        return self._global.copy()

    def global_translation(self) -> np.ndarray:
        return self._global[:3, 3].copy()

    def update(self, dt: float) -> None:
        """Make the owner's AABB enclose its own box and its children's."""
        owner = self.parent
        if not owner.children:
            return
        box = AABB.negative_infinity()
        if _has_mesh(owner):
            box.enclose(owner.oobb)
        for child in owner.children:
            box.enclose(child.aabb)
        owner.aabb = box

    def set_position(self, position) -> None:
        self._translation = np.array(position, dtype=float)
        self.update_transform()

    def set_scale(self, scale) -> None:
        self._scale = np.array(scale, dtype=float)
        self.update_transform()

    def set_orientation(self, euler_angles) -> None:
        """Set the orientation from Euler angles in degrees."""
        radians = np.radians(np.asarray(euler_angles, dtype=float))
        delta = quat_from_euler(radians - self._euler)
        self._orientation = quat_multiply(self._orientation, delta)
        self._euler = radians
        self.update_transform()

    def move(self, translation) -> None:
        self._translation = self._translation + np.asarray(translation, dtype=float)
        self.update_transform()

    def scale_by(self, scale) -> None:
        self._scale = self._scale + np.asarray(scale, dtype=float)
        self.update_transform()

    def rotate(self, euler_angles) -> None:
        """Replace the orientation with the given Euler angles in degrees."""
        radians = np.radians(np.asarray(euler_angles, dtype=float))
        self._orientation = quat_from_euler(radians)
        self._euler = radians
        self.update_transform()

    def update_transform(self) -> None:
        owner = self.parent
        self._local = (
            translate_matrix(self._translation)
            @ quat_to_matrix(self._orientation)
            @ scale_matrix(self._scale)
        )

        owner_parent = owner.parent
        parent_transform = _transform_of(owner_parent) if owner_parent is not None else None
        if parent_transform is not None:
            self._global = parent_transform.global_matrix @ self._local
        else:
            self._global = self._local.copy()

        owner.set_oobb_transform(self._global)

        if self.tree is not None:
            self.tree.take_out(owner)
            self.tree.insert(owner)

        for child in owner.children:
            child_transform = _transform_of(child)
            if child_transform is not None:
                child_transform.update_transform()