"""JSON reporter emitting structured verification results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
import time
from typing import Any, Dict, Sequence

import click
from jsonschema import validate

from aojverify.core.results import RunResult, Summary
from aojverify.errors import VerifyError

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results to a JSON file validated against the schema.

    Without a path the report is printed to stdout.
    """

    def __init__(self, path: str | None = None) -> None:
        self._path = pathlib.Path(path) if path else None
        self._records: list[Dict[str, Any]] = []
        self._source = ""
        self._cases_dir = ""
        self._start_time = 0.0

    def on_start(self, source: pathlib.Path, cases_dir: pathlib.Path) -> None:
        self._source = str(source)
        self._cases_dir = str(cases_dir)
        self._records.clear()
        self._start_time = time.perf_counter()

    def on_case_result(self, result: RunResult, index: int, total: int) -> None:
        self._records.append(_result_to_dict(result))

    def on_complete(self, results: Sequence[RunResult], summary: Summary) -> None:
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
            "source": self._source,
            "cases_dir": self._cases_dir,
            "summary": _build_summary(summary, time.perf_counter() - self._start_time),
            "cases": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        text = json.dumps(payload, indent=2)
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise VerifyError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _build_summary(summary: Summary, duration: float) -> Dict[str, Any]:
    return {
        "total": summary.total,
        "counts": summary.counts(),
        "slowest_case": summary.slowest_case,
        "slowest_time_ms": summary.slowest_time_s * 1000,
        "duration_s": duration,
    }


def _result_to_dict(result: RunResult) -> Dict[str, Any]:
    return {
        "name": result.name,
        "verdict": result.verdict.label,
        "duration_ms": result.duration_s * 1000,
    }
