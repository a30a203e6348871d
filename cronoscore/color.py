"""RGBA colours."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Color:
    """An RGBA colour with float channels; alpha defaults to opaque."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0

    def set(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.r, self.g, self.b, self.a = r, g, b, a

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)