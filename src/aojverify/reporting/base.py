"""Reporter interface definitions."""
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from aojverify.core.results import RunResult, Summary


class Reporter:
    """Interface for output renderers."""

    def on_start(self, source: Path, cases_dir: Path) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_case_result(self, result: RunResult, index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, results: Sequence[RunResult], summary: Summary) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)
        self._results: List[RunResult] = []

    def start(self, source: Path, cases_dir: Path) -> None:
        self._results.clear()
        for reporter in self._reporters:
            reporter.on_start(source, cases_dir)

    def handle_result(self, result: RunResult, index: int, total: int) -> None:
        self._results.append(result)
        for reporter in self._reporters:
            reporter.on_case_result(result, index, total)

    def complete(self, summary: Summary) -> None:
        for reporter in self._reporters:
            reporter.on_complete(list(self._results), summary)

    def reporters(self) -> List[Reporter]:
        return list(self._reporters)
