"""Exception hierarchy shared across aojverify subsystems."""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from aojverify.core.models import TestCase


class VerifyError(RuntimeError):
    """Base class for failures that abort a verification invocation."""


class ConfigError(VerifyError):
    """Settings file is missing, malformed, or fails schema validation."""


class AnnotationError(VerifyError):
    """Solution source carries no usable problem annotation."""


class ProblemURLError(VerifyError):
    """Problem URL does not belong to a supported judge."""


class BuildError(VerifyError):
    """Toolchain failed to produce an executable artifact."""

    def __init__(self, message: str, diagnostics: str = "") -> None:
        self.diagnostics = diagnostics
        text = f"{message}\n{diagnostics}" if diagnostics else message
        super().__init__(text)


class DiscoveryError(VerifyError):
    """Test-case directory could not be scanned."""


class _AggregateError(VerifyError):
    """Carries every error collected while iterating over independent items."""

    headline = "multiple errors"

    def __init__(self, errors: Sequence[object]) -> None:
        self.errors = list(errors)
        lines = [f"{self.headline} ({len(self.errors)}):"]
        lines.extend(f"  - {err}" for err in self.errors)
        super().__init__("\n".join(lines))


class CaseIOError(VerifyError):
    """I/O failure around one test case, unrelated to the solution itself."""

    def __init__(self, case: TestCase, action: str, cause: OSError) -> None:
        self.case = case
        self.cause = cause
        super().__init__(f"{case.name}: failed to {action}: {cause}")


class CaseInfrastructureError(_AggregateError):
    """I/O failures around test-case plumbing, raised once after the run loop."""

    headline = "failed to run cases"


class FetchError(_AggregateError):
    """Test data could not be downloaded or stored."""

    headline = "failed to fetch testcases"
