"""Octree that partitions space for objects carrying an ``aabb``."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

import numpy as np

from cronoscore.geometry import AABB


class NodeType(Enum):
    NONE = -1
    ROOT = 0
    PARENT = 1
    CHILD = 2


class Bounded(Protocol):
    aabb: AABB


def _octants(space: AABB) -> list[AABB]:
    lo, hi = space.min_point, space.max_point
    mid = (lo + hi) / 2.0
    boxes = []
    for upper_y in (True, False):
        for upper_z in (True, False):
            for upper_x in (True, False):
                upper = (upper_x, upper_y, upper_z)
                box_min = np.array([mid[i] if upper[i] else lo[i] for i in range(3)])
                box_max = np.array([hi[i] if upper[i] else mid[i] for i in range(3)])
                boxes.append(AABB(box_min, box_max))
    return boxes


class OctreeNode:
    """One cell of an octree; a leaf splits once it holds too many objects."""

    def __init__(
        self,
        space: AABB,
        node_type: NodeType = NodeType.CHILD,
        max_objects: int = 1,
    ) -> None:
        self.cubic_space = space
        self.node_type = node_type
        self.max_objects = max_objects
        self.children: list[OctreeNode] = []
        self.objects: list[Any] = []
        self.is_child = True

    def _reaches(self, space: Any) -> bool:
        if isinstance(space, AABB):
            return self.cubic_space.intersects(space) or self.cubic_space.contains(space)
        return bool(space.intersects_aabb(self.cubic_space))

    def objects_in(self, space: Any) -> list[Any]:
        """Objects in nodes reached by an AABB or by a volume with ``intersects_aabb``."""
        if not self._reaches(space):
            return []
        from_children: list[Any] = []
        for child in self.children:
            from_children[:0] = child.objects_in(space)
        return from_children + list(self.objects)

    def clean_up(self) -> None:
        for child in self.children:
            child.clean_up()
        self.children = []
        self.objects.clear()

    def clean_nodes(self) -> None:
        """Drop the sub-nodes and turn back into a leaf."""
        for child in self.children:
            child.clean_up()
        self.children = []
        if self.node_type is not NodeType.ROOT:
            self.node_type = NodeType.CHILD

    def split(self) -> None:
        if self.node_type is not NodeType.ROOT:
            self.node_type = NodeType.PARENT
        self.is_child = False
        self.children = [
            OctreeNode(box, NodeType.CHILD, self.max_objects)
            for box in _octants(self.cubic_space)
        ]

    def _place(self, obj: Any) -> None:
        container = None
        for child in self.children:
            if child.cubic_space.intersects(obj.aabb):
                if container is not None:
                    self.objects.append(obj)
                    return
                container = child
        if container is not None:
            container.insert(obj)

    def insert(self, obj: Bounded) -> bool:
        """Store an object; False when it lies outside this node."""
        if not self.cubic_space.intersects(obj.aabb):
            return False

        has_children = bool(self.children)
        if self.node_type is NodeType.PARENT or (self.node_type is NodeType.ROOT and has_children):
            self._place(obj)
            return True

        if self.node_type is NodeType.CHILD or (self.node_type is NodeType.ROOT and not has_children):
            self.objects.append(obj)
            if len(self.objects) > self.max_objects:
                self.split()
                pending, self.objects = self.objects, []
                for item in pending:
                    self._place(item)
            return True

        return False

    def take_out(self, obj: Any) -> None:
        for i, held in enumerate(self.objects):
            if held is obj:
                del self.objects[i]
                return

        if self.children:
            for child in self.children:
                child.take_out(obj)
            if self.children[0].node_type is NodeType.CHILD and all(
                not child.objects for child in self.children
            ):
                self.clean_nodes()


class Octree:
    """Octree rooted at a given cube of space."""

    def __init__(self, space: AABB, max_objects: int) -> None:
        self.root = OctreeNode(space, NodeType.ROOT, max_objects)
        self._splitted = False

    @property
    def is_splitted(self) -> bool:
        return self._splitted

    @property
    def cubic_space(self) -> AABB:
        return self.root.cubic_space

    def clean_up(self) -> None:
        self.root.clean_up()

    def insert(self, obj: Bounded) -> bool:
        self._splitted = True
        return self.root.insert(obj)

    def take_out(self, obj: Any) -> None:
        self.root.take_out(obj)

    def objects_in(self, space: Any) -> list[Any]:
        return self.root.objects_in(space)