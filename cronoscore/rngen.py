"""Random number generation helpers."""

from __future__ import annotations

import random

INT_MAX = 2**31 - 1


class RNGen:
    """Uniform random numbers, seeded from the system unless a seed is given."""

    def __init__(self, seed: int | None = None) -> None:
        self._engine = random.Random(seed)

    def int_rn(self) -> int:
        """A non-negative integer in [0, INT_MAX]."""
        return self._engine.randint(0, INT_MAX)

    def int_rn_in_range(self, low: int, high: int) -> int:
        """An integer in [low, high], both ends included."""
        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return self._engine.randint(low, high)

    def int_rn_vec_in_range(self, size: int, low: int, high: int) -> list[int]:
        if low > high:
            raise ValueError(f"empty range [{low}, {high}]")
        return [self._engine.randint(low, high) for _ in range(size)]

    def int_rn_vec(self, size: int) -> list[int]:
        return [self.int_rn() for _ in range(size)]

    def double_rn(self) -> float:
        """A float in [0, 1)."""
        return self._engine.random()

    def double_rn_vec_in_range(self, size: int, low: float, high: float) -> list[float]:
        """Floats in [low, high)."""
        if low > high:
            raise ValueError(f"empty range [{low}, {high})")
        span = high - low
        return [low + span * self._engine.random() for _ in range(size)]

    def double_rn_vec(self, size: int) -> list[float]:
        return [self._engine.random() for _ in range(size)]