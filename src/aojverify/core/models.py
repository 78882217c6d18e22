"""Core dataclasses shared across aojverify subsystems."""
from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

INPUT_SUFFIX = ".in"
OUTPUT_SUFFIX = ".out"


class Verdict(enum.Enum):
    """Classification of a single test-case run."""

    UNKNOWN = "unknown"
    ACCEPTED = "accepted"
    WRONG_ANSWER = "wrong_answer"
    RUNTIME_ERROR = "runtime_error"
    TIME_LIMIT_EXCEEDED = "time_limit_exceeded"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Verdict.UNKNOWN: "UNKNOWN",
    Verdict.ACCEPTED: "AC",
    Verdict.WRONG_ANSWER: "WA",
    Verdict.RUNTIME_ERROR: "RE",
    Verdict.TIME_LIMIT_EXCEEDED: "TLE",
}


@dataclass(frozen=True)
class TestCase:
    """A paired input / expected-output fixture inside the cache directory."""

    __test__ = False  # not a pytest class

    name: str
    input_path: Path
    output_path: Path

    @classmethod
    def from_input(cls, input_path: Path) -> "TestCase":
        if not input_path.name.endswith(INPUT_SUFFIX):
            raise ValueError(f"Not a test-case input file: {input_path}")
        stem = input_path.name[: -len(INPUT_SUFFIX)]
        return cls(
            name=stem,
            input_path=input_path,
            output_path=input_path.with_name(stem + OUTPUT_SUFFIX),
        )
