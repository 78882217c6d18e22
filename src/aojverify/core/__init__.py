"""Core models and helpers exposed at the package level."""
from .build import Toolchain, build_solution
from .classifier import classify
from .comparator import files_are_equal
from .models import TestCase, Verdict
from .results import RunResult, Summary, summarize
from .runner import Verifier, discover_cases
from .stopwatch import Stopwatch

__all__ = [
    "RunResult",
    "Stopwatch",
    "Summary",
    "TestCase",
    "Toolchain",
    "Verdict",
    "Verifier",
    "build_solution",
    "classify",
    "discover_cases",
    "files_are_equal",
    "summarize",
]
