from __future__ import annotations

import logging
import sys
import textwrap
from pathlib import Path
from typing import Mapping, Tuple

import pytest

from aojverify.core import Toolchain

# Byte-compiles the source (so syntax errors fail the build) and copies it as the artifact.
PYTHON_BUILD_COMMAND = (
    sys.executable,
    "-c",
    "import py_compile, shutil, sys; "
    "py_compile.compile(sys.argv[1], doraise=True); "
    "shutil.copyfile(sys.argv[1], sys.argv[2])",
    "{source}",
    "{output}",
)
PYTHON_RUN_COMMAND = (sys.executable, "{binary}")

ECHO_UPPER_SOLUTION = """
import sys
import time

data = sys.stdin.read()
if data.startswith("crash"):
    sys.stderr.write("crashed on " + data)
    sys.exit(3)
if data.startswith("sleep"):
    time.sleep(10)
sys.stdout.write(data.upper())
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logging.getLogger("aojverify").handlers.clear()


@pytest.fixture
def python_toolchain() -> Toolchain:
    return Toolchain(build_command=PYTHON_BUILD_COMMAND, run_command=PYTHON_RUN_COMMAND)


@pytest.fixture
def solution(tmp_path: Path) -> Path:
    path = tmp_path / "main.py"
    path.write_text(
        "# verification-helper: PROBLEM https://onlinejudge.u-aizu.ac.jp/courses/lesson/1/ALDS1/1/ITP1_1_A\n"
        + textwrap.dedent(ECHO_UPPER_SOLUTION),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def write_cases():
    return _write_cases


def _write_cases(directory: Path, cases: Mapping[str, Tuple[str, str]]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, (stdin, expected) in cases.items():
        (directory / f"{name}.in").write_bytes(stdin.encode("utf-8"))
        (directory / f"{name}.out").write_bytes(expected.encode("utf-8"))
    return directory
