"""Toolchain invocation producing the executable under test."""
from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence

from aojverify.errors import BuildError, ConfigError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_COMMAND = ("go", "build", "-o", "{output}", "{source}")
DEFAULT_RUN_COMMAND = ("{binary}",)


@dataclass(frozen=True)
class Toolchain:
    """How to turn a solution source into something runnable.

    ``build_command`` understands the ``{source}`` and ``{output}`` tokens,
    ``run_command`` understands ``{binary}``.
    """

    build_command: Sequence[str] = DEFAULT_BUILD_COMMAND
    run_command: Sequence[str] = DEFAULT_RUN_COMMAND
    env: Mapping[str, str] = field(default_factory=dict)
    build_timeout: Optional[float] = None

    def render_build(self, source: Path, output: Path) -> list[str]:
        tokens = {"source": str(source), "output": str(output)}
        return [render_token(part, tokens) for part in self.build_command]

    def render_run(self, binary: Path) -> list[str]:
        tokens = {"binary": str(binary)}
        return [render_token(part, tokens) for part in self.run_command]

    def check_tokens(self) -> None:
        """Render both commands with placeholder paths to catch unknown tokens early."""

        self.render_build(Path("source"), Path("output"))
        self.render_run(Path("binary"))

    def environment(self) -> Dict[str, str]:
        env = os.environ.copy()
        env.update({str(k): str(v) for k, v in self.env.items()})
        return env


def render_token(value: str, tokens: Mapping[str, str]) -> str:
    if "{" not in value or "}" not in value:
        return value
    try:
        return value.format(**tokens)
    except (KeyError, IndexError) as exc:
        available = ", ".join(sorted(tokens.keys()))
        raise ConfigError(
            f"Unknown token {exc} in value '{value}'. Available tokens: {available}"
        ) from exc
    except ValueError as exc:
        raise ConfigError(f"Malformed token in value '{value}': {exc}") from exc


def build_solution(source: Path, output: Path, toolchain: Toolchain) -> None:
    """Build ``source`` into the executable ``output``.

    Raises ``BuildError`` with the toolchain's own diagnostics when it cannot
    be started or exits non-zero, and without diagnostics when it times out
    or leaves no artifact behind.
    """

    argv = toolchain.render_build(source, output)
    logger.debug("building solution: %s", " ".join(argv))
    try:
        proc = subprocess.run(
            argv,
            env=toolchain.environment(),
            capture_output=True,
            text=True,
            timeout=toolchain.build_timeout,
        )
    except OSError as exc:
        raise BuildError(f"cannot start build toolchain {argv[0]!r}", str(exc)) from exc
    except subprocess.TimeoutExpired as exc:
        raise BuildError(
            f"build of {source} timed out after {toolchain.build_timeout}s"
        ) from exc
    if proc.returncode != 0:
        diagnostics = proc.stderr or proc.stdout
        raise BuildError(
            f"failed to build {source} (exit code {proc.returncode})", diagnostics
        )
    if not output.exists():
        raise BuildError(f"build of {source} reported success but produced no {output}")
    logger.debug("built %s -> %s", source, output)
