"""Base class for the engine modules driven by the application loop."""

from __future__ import annotations

from enum import Enum
from typing import Any


class UpdateStatus(Enum):
    """What a module asks the main loop to do after an update step."""

    CONTINUE = 1
    STOP = 2
    ERROR = 3


class Module:
    """An engine subsystem with init, update and clean-up hooks.

    Every hook succeeds by default; subclasses override the ones they need.
    """

    def __init__(self, app: Any = None, name: str = "Module Unnamed", start_enabled: bool = True) -> None:
        self.app = app
        self.name = name
        self.active = start_enabled

    def on_init(self) -> bool:
        return True

    def on_start(self) -> bool:
        return True

    def on_clean_up(self) -> bool:
        return True

    def on_pre_update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def on_update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def on_post_update(self, dt: float) -> UpdateStatus:
        return UpdateStatus.CONTINUE

    def save_module_data(self, data: dict) -> None:
        """Write this module's settings into the configuration document."""

    def load_module_data(self, data: dict) -> None:
        """Read this module's settings from the configuration document."""