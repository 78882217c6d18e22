from __future__ import annotations

from aojverify.core import stopwatch as stopwatch_module
from aojverify.core.stopwatch import Stopwatch


def test_elapsed_measures_from_last_start(monkeypatch) -> None:
    ticks = iter([10.0, 10.25, 20.0, 20.5])
    monkeypatch.setattr(stopwatch_module.time, "perf_counter", lambda: next(ticks))
    watch = Stopwatch()
    watch.start()
    assert watch.elapsed() == 0.25
    watch.start()
    assert watch.elapsed() == 0.5


def test_elapsed_is_non_negative_after_start() -> None:
    watch = Stopwatch()
    watch.start()
    assert watch.elapsed() >= 0.0


def test_reset_clears_reference_point(monkeypatch) -> None:
    ticks = iter([5.0, 7.0])
    monkeypatch.setattr(stopwatch_module.time, "perf_counter", lambda: next(ticks))
    watch = Stopwatch()
    watch.start()
    watch.reset()
    assert watch.elapsed() == 7.0
