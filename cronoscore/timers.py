"""Millisecond, game and high-resolution timers."""

from __future__ import annotations

import time
from typing import Callable

_EPOCH = time.monotonic()


def ticks() -> int:
    """Milliseconds elapsed since the package was first imported."""
    return int((time.monotonic() - _EPOCH) * 1000)


Clock = Callable[[], float]


class Timer:
    """Tick timer with millisecond resolution that starts on creation."""

    def __init__(self, clock: Clock = ticks) -> None:
        self._clock = clock
        self.running = False
        self.started_at = 0
        self.stopped_at = 0
        self.start()

    def start(self) -> None:
        self.running = True
        self.started_at = self._clock()

    def stop(self) -> None:
        self.running = False
        self.stopped_at = self._clock()

    def _elapsed(self) -> float:
        end = self._clock() if self.running else self.stopped_at
        return end - self.started_at

    def read(self) -> int:
        """Elapsed milliseconds."""
        return int(self._elapsed())

    def read_sec(self) -> float:
        """Elapsed seconds."""
        return self._elapsed() / 1000.0


class GameTimer:
    """Timer for game time that can be paused, resumed and stopped."""

    def __init__(self, clock: Clock = ticks) -> None:
        self._clock = clock
        self._starting_time = 0.0
        self._paused_at = 0.0
        self._active = False
        self._paused = True
        self.start()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def is_paused(self) -> bool:
        return self._paused

    def start(self) -> None:
        self._active = True
        self._paused = False
        self._starting_time = float(self._clock())
        self._paused_at = 0.0

    def stop(self) -> None:
        self._active = False
        self._paused = True
        self._starting_time = 0.0
        self._paused_at = 0.0

    def play(self) -> None:
        """Resume after a pause; the paused interval is not counted."""
        if not self._paused:
            return
        self._paused = False
        self._starting_time = (self._clock() + self._starting_time) - self._paused_at

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        self._paused_at = float(self._clock())

    def restart(self) -> None:
        self.start()
        self.play()

    def _elapsed(self) -> float:
        if not self._active:
            return 0.0
        end = self._paused_at if self._paused else self._clock()
        return end - self._starting_time

    def read(self) -> int:
        """Elapsed game milliseconds, 0 when stopped."""
        return int(self._elapsed())

    def read_sec(self) -> float:
        """Elapsed game seconds, 0.0 when stopped."""
        return self._elapsed() / 1000.0


class PerfTimer:
    """High-resolution timer driven by a performance counter."""

    def __init__(
        self,
        counter: Callable[[], int] = time.perf_counter_ns,
        frequency: int = 1_000_000_000,
    ) -> None:
        if frequency <= 0:
            raise ValueError("counter frequency must be positive")
        self._counter = counter
        self.frequency = frequency
        self.started_at = 0
        self.start()

    def start(self) -> None:
        self.started_at = self._counter()

    def read_ms(self) -> float:
        return 1000.0 * (self._counter() - self.started_at) / self.frequency

    def read_ticks(self) -> int:
        return self._counter() - self.started_at