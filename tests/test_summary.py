from __future__ import annotations

import pytest

from aojverify.core.models import Verdict
from aojverify.core.results import RunResult, summarize
from aojverify.errors import VerifyError


def _result(name: str, verdict: Verdict, duration: float) -> RunResult:
    return RunResult(name=name, verdict=verdict, duration_s=duration)


def test_counts_partition_results() -> None:
    results = [
        _result("a", Verdict.ACCEPTED, 0.1),
        _result("b", Verdict.ACCEPTED, 0.2),
        _result("c", Verdict.WRONG_ANSWER, 0.1),
        _result("d", Verdict.RUNTIME_ERROR, 0.1),
        _result("e", Verdict.TIME_LIMIT_EXCEEDED, 2.0),
    ]
    summary = summarize(results)
    assert summary.counts() == {"AC": 2, "WA": 1, "TLE": 1, "RE": 1}
    assert summary.total == len(results)
    assert not summary.all_accepted
    assert summary.total_time_s == pytest.approx(2.5)


def test_slowest_case_is_maximum() -> None:
    results = [
        _result("a", Verdict.ACCEPTED, 0.3),
        _result("b", Verdict.ACCEPTED, 0.9),
        _result("c", Verdict.WRONG_ANSWER, 0.5),
    ]
    summary = summarize(results)
    assert summary.slowest_case == "b"
    assert summary.slowest_time_s == 0.9


def test_slowest_case_ties_keep_first() -> None:
    results = [
        _result("a", Verdict.ACCEPTED, 0.1),
        _result("b", Verdict.ACCEPTED, 0.7),
        _result("c", Verdict.RUNTIME_ERROR, 0.7),
    ]
    assert summarize(results).slowest_case == "b"


def test_empty_results_give_zero_summary() -> None:
    summary = summarize([])
    assert summary.counts() == {"AC": 0, "WA": 0, "TLE": 0, "RE": 0}
    assert summary.total == 0
    assert summary.slowest_case is None
    assert summary.slowest_time_s == 0.0


def test_unknown_verdict_is_rejected() -> None:
    with pytest.raises(VerifyError):
        summarize([_result("a", Verdict.UNKNOWN, 0.1)])
