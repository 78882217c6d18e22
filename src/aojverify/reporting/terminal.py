"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Sequence

import click

from aojverify.core.models import Verdict
from aojverify.core.results import RunResult, Summary

from .base import Reporter


VERDICT_COLORS = {
    Verdict.ACCEPTED: "green",
    Verdict.WRONG_ANSWER: "red",
    Verdict.RUNTIME_ERROR: "yellow",
    Verdict.TIME_LIMIT_EXCEEDED: "magenta",
    Verdict.UNKNOWN: None,
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        self._start_time = 0.0
        self._failures: list[tuple[int, RunResult]] = []

    def on_start(self, source: Path, cases_dir: Path) -> None:
        self._start_time = time.perf_counter()
        self._failures.clear()
        click.echo(self._styled(f"Verifying {source} against {cases_dir}", color="cyan"))

    def on_case_result(self, result: RunResult, index: int, total: int) -> None:
        ms = result.duration_s * 1000
        label = self._styled(f"{result.verdict.label:<3}", color=VERDICT_COLORS[result.verdict])
        click.echo(f"[{index}/{total}] {label} {result.name} ({ms:.2f} ms)")
        if not result.passed:
            self._failures.append((index, result))

    def on_complete(self, results: Sequence[RunResult], summary: Summary) -> None:
        duration = time.perf_counter() - self._start_time
        color = "green" if summary.all_accepted else "red"
        counts = " ".join(f"{label}={count}" for label, count in summary.counts().items())
        click.echo(
            self._styled(f"Summary: total={summary.total} {counts} duration={duration:.2f}s", color=color)
        )
        if summary.slowest_case is not None:
            click.echo(f"Slowest: {summary.slowest_case} ({summary.slowest_time_s * 1000:.2f} ms)")
        if self._failures:
            click.echo(self._styled("Not accepted:", color="red"))
            for index, result in self._failures:
                click.echo(f"  [{index}] {result.name} -> {result.verdict.label}")

    def _styled(self, text: str, *, color: str | None) -> str:
        if not self._use_color or not color:
            return text
        return click.style(text, fg=color)
