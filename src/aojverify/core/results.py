"""Result data structures produced by the verifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from aojverify.errors import VerifyError

from .models import Verdict


@dataclass(frozen=True)
class RunResult:
    """Outcome of running the solution against a single test case."""

    name: str
    verdict: Verdict
    duration_s: float

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.ACCEPTED


@dataclass(frozen=True)
class Summary:
    """Aggregate over every run of one verification."""

    accepted: int = 0
    wrong_answer: int = 0
    time_limit_exceeded: int = 0
    runtime_error: int = 0
    slowest_case: Optional[str] = None
    slowest_time_s: float = 0.0
    total_time_s: float = 0.0

    @property
    def total(self) -> int:
        return self.accepted + self.wrong_answer + self.time_limit_exceeded + self.runtime_error

    @property
    def all_accepted(self) -> bool:
        return self.accepted == self.total

    def counts(self) -> dict[str, int]:
        return {
            Verdict.ACCEPTED.label: self.accepted,
            Verdict.WRONG_ANSWER.label: self.wrong_answer,
            Verdict.TIME_LIMIT_EXCEEDED.label: self.time_limit_exceeded,
            Verdict.RUNTIME_ERROR.label: self.runtime_error,
        }


def summarize(results: Sequence[RunResult]) -> Summary:
    """Fold run results into per-verdict counts and the slowest case.

    Ties on duration keep the earliest result.
    """

    counts = {
        Verdict.ACCEPTED: 0,
        Verdict.WRONG_ANSWER: 0,
        Verdict.TIME_LIMIT_EXCEEDED: 0,
        Verdict.RUNTIME_ERROR: 0,
    }
    slowest_case: Optional[str] = None
    slowest_time = 0.0
    total_time = 0.0
    for result in results:
        if result.verdict not in counts:
            raise VerifyError(f"Run result {result.name!r} has no verdict")
        counts[result.verdict] += 1
        total_time += result.duration_s
        if slowest_case is None or result.duration_s > slowest_time:
            slowest_case = result.name
            slowest_time = result.duration_s
    return Summary(
        accepted=counts[Verdict.ACCEPTED],
        wrong_answer=counts[Verdict.WRONG_ANSWER],
        time_limit_exceeded=counts[Verdict.TIME_LIMIT_EXCEEDED],
        runtime_error=counts[Verdict.RUNTIME_ERROR],
        slowest_case=slowest_case,
        slowest_time_s=slowest_time,
        total_time_s=total_time,
    )
