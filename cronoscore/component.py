"""Base class for the components attached to game objects."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ComponentType(Enum):
    NONE = -1
    TRANSFORM = 0
    MESH = 1
    MESH_RENDERER = 2
    MATERIAL = 3
    CAMERA = 4
    LIGHT = 5


class Component:
    """A piece of behaviour owned by a game object.

    Subclasses set ``TYPE`` so that a game object can find them by class.
    """

    TYPE = ComponentType.NONE

    def __init__(
        self,
        component_type: ComponentType,
        parent: Any = None,
        start_enabled: bool = True,
    ) -> None:
        self._type = component_type
        self.parent = parent
        self._active = start_enabled
        self.started = False

    @property
    def component_type(self) -> ComponentType:
        return self._type

    @property
    def is_enabled(self) -> bool:
        return self._active

    def on_start(self) -> None:
        """Hook called when the component starts; marks it as started."""
        self.started = True

    def update(self, dt: float) -> None:
        """Per-frame hook; does nothing by default."""

    def enable(self) -> None:
        self._active = True

    def disable(self) -> None:
        self._active = False