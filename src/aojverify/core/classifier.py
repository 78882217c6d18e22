"""Mapping from run outcome to verdict."""
from __future__ import annotations

from typing import Optional

from .models import Verdict


def classify(
    run_error: Optional[BaseException],
    output_equal: bool,
    *,
    timed_out: bool = False,
) -> Verdict:
    """Return the verdict for one finished run.

    ``run_error`` is the failure raised while spawning or waiting on the
    solution (including a non-zero exit), or None when it exited cleanly.
    ``output_equal`` is ignored unless the run succeeded.
    """

    if timed_out:
        return Verdict.TIME_LIMIT_EXCEEDED
    if run_error is not None:
        return Verdict.RUNTIME_ERROR
    if output_equal:
        return Verdict.ACCEPTED
    return Verdict.WRONG_ANSWER
