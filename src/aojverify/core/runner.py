"""Verification engine: build once, then judge every cached test case in order."""
from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple

from aojverify.errors import CaseInfrastructureError, CaseIOError, DiscoveryError, VerifyError

from .build import Toolchain, build_solution
from .classifier import classify
from .comparator import files_are_equal
from .models import INPUT_SUFFIX, TestCase
from .results import RunResult, Summary, summarize
from .stopwatch import Stopwatch

logger = logging.getLogger(__name__)

ResultCallback = Callable[[RunResult, int, int], None]

# Tail of the solution's stderr kept in debug logs.
STDERR_LOG_LIMIT = 4096


def discover_cases(cases_dir: Path) -> List[TestCase]:
    """Recursively collect ``*.in`` files under ``cases_dir`` sorted by full path."""

    root = Path(cases_dir)
    if not root.is_dir():
        raise DiscoveryError(f"test-case directory not found: {root}")

    def _raise(err: OSError) -> None:
        raise err

    paths: list[Path] = []
    try:
        for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
            for filename in filenames:
                if filename.endswith(INPUT_SUFFIX):
                    paths.append(Path(dirpath) / filename)
    except OSError as exc:
        raise DiscoveryError(f"failed to walk {root}: {exc}") from exc
    return [TestCase.from_input(path) for path in sorted(paths, key=str)]


class Verifier:
    """Builds a solution and judges it against test cases sequentially."""

    def __init__(
        self,
        toolchain: Toolchain,
        *,
        work_dir: Path,
        time_limit: Optional[float] = None,
    ) -> None:
        self._toolchain = toolchain
        self._work_dir = Path(work_dir)
        self._time_limit = time_limit

    def verify(
        self,
        source: Path,
        cases_dir: Path,
        *,
        on_result: Optional[ResultCallback] = None,
    ) -> Summary:
        """Run the whole build / discover / judge / summarize cycle.

        Failing verdicts are data and never raise. Build, discovery and any
        per-case I/O failure raise a ``VerifyError`` subclass instead, the
        latter only after every case has been attempted.
        """

        try:
            self._work_dir.mkdir(parents=True, exist_ok=True)
            scratch = tempfile.TemporaryDirectory(prefix="tmp", dir=self._work_dir)
        except OSError as exc:
            raise VerifyError(f"failed to create scratch directory in {self._work_dir}: {exc}") from exc
        with scratch as scratch_name:
            scratch_dir = Path(scratch_name)
            binary = scratch_dir / "main"
            build_solution(Path(source), binary, self._toolchain)
            cases = discover_cases(Path(cases_dir))
            logger.info("discovered %d test case(s) in %s", len(cases), cases_dir)
            results, errors = self._run_cases(cases, binary, scratch_dir, on_result)
        if errors:
            raise CaseInfrastructureError(errors)
        summary = summarize(results)
        logger.info(
            "summary: AC=%d WA=%d TLE=%d RE=%d slowest=%s (%.3fs)",
            summary.accepted,
            summary.wrong_answer,
            summary.time_limit_exceeded,
            summary.runtime_error,
            summary.slowest_case,
            summary.slowest_time_s,
            extra={
                "slowest_case": summary.slowest_case,
                "slowest_time_s": summary.slowest_time_s,
                "counts": summary.counts(),
            },
        )
        return summary

    def _run_cases(
        self,
        cases: Sequence[TestCase],
        binary: Path,
        scratch_dir: Path,
        on_result: Optional[ResultCallback],
    ) -> Tuple[List[RunResult], List[CaseIOError]]:
        argv = self._toolchain.render_run(binary)
        results: List[RunResult] = []
        errors: List[CaseIOError] = []
        total = len(cases)
        for index, case in enumerate(cases, start=1):
            try:
                result = self._run_case(case, argv, scratch_dir)
            except CaseIOError as exc:
                logger.error("%s", exc)
                errors.append(exc)
                continue
            logger.info(
                "%s %s (%.3fs)",
                result.verdict.label,
                case.name,
                result.duration_s,
                extra={"testcase": case.name, "verdict": result.verdict.label, "time_s": result.duration_s},
            )
            results.append(result)
            if on_result:
                on_result(result, index, total)
        return results, errors

    def _run_case(self, case: TestCase, argv: Sequence[str], scratch_dir: Path) -> RunResult:
        try:
            stdin = case.input_path.open("rb")
        except OSError as exc:
            raise CaseIOError(case, "read .in file", exc) from exc
        with stdin:
            try:
                stdout = tempfile.NamedTemporaryFile(
                    mode="wb", dir=scratch_dir, prefix="answer", delete=False
                )
            except OSError as exc:
                raise CaseIOError(case, "create answer file", exc) from exc
            with stdout:
                answer_path = Path(stdout.name)
                stopwatch = Stopwatch()
                stopwatch.start()
                run_error, timed_out = self._execute(argv, stdin, stdout)
                elapsed = stopwatch.elapsed()
        if run_error is not None or timed_out:
            return RunResult(case.name, classify(run_error, False, timed_out=timed_out), elapsed)
        try:
            equal = files_are_equal(answer_path, case.output_path)
        except OSError as exc:
            raise CaseIOError(case, "compare files", exc) from exc
        return RunResult(case.name, classify(None, equal), elapsed)

    def _execute(
        self, argv: Sequence[str], stdin: BinaryIO, stdout: BinaryIO
    ) -> Tuple[Optional[BaseException], bool]:
        try:
            subprocess.run(
                list(argv),
                stdin=stdin,
                stdout=stdout,
                stderr=subprocess.PIPE if logger.isEnabledFor(logging.DEBUG) else subprocess.DEVNULL,
                env=self._toolchain.environment(),
                timeout=self._time_limit,
                check=True,
            )
        except subprocess.TimeoutExpired:
            return None, True
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or b"")[-STDERR_LOG_LIMIT:].decode("utf-8", errors="replace").strip()
            logger.debug("solution exited with code %s: %s", exc.returncode, stderr)
            return exc, False
        except OSError as exc:
            logger.debug("solution could not be started: %s", exc)
            return exc, False
        return None, False
