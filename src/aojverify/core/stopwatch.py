"""Elapsed-time measurement for solution runs."""
from __future__ import annotations

import time


class Stopwatch:
    """Measures wall-clock seconds since the last ``start()``.

    ``elapsed()`` before ``start()`` measures from the clock's reference
    point and is meaningless; always start first. Not thread-safe.
    """

    def __init__(self) -> None:
        self._start = 0.0

    def start(self) -> None:
        self._start = time.perf_counter()

    def reset(self) -> None:
        self._start = 0.0

    def elapsed(self) -> float:
        return time.perf_counter() - self._start
