"""Problem references embedded in solution sources."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from aojverify.errors import AnnotationError, ProblemURLError

# C-family sources use "//", scripting languages "#".
ANNOTATION_PREFIXES = ("// verification-helper: ", "# verification-helper: ")
_ANNOTATION_RE = re.compile(r"(?://|#) verification-helper: PROBLEM (.*)")


@dataclass(frozen=True)
class Annotation:
    problem_url: str


def read_annotation(path: Path) -> Annotation:
    """Return the first ``verification-helper`` annotation found in ``path``."""

    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise AnnotationError(f"failed to read {path}: {exc}") from exc
    for line in text.splitlines():
        if not line.startswith(ANNOTATION_PREFIXES):
            continue
        return parse_annotation_comment(line)
    raise AnnotationError(f"annotation comment is not found. filename: {path}")


def parse_annotation_comment(line: str) -> Annotation:
    match = _ANNOTATION_RE.match(line)
    if not match or not match.group(1).strip():
        raise AnnotationError(
            f'annotation comment does not match "{_ANNOTATION_RE.pattern}": {line.strip()}'
        )
    return Annotation(problem_url=match.group(1).strip())


def extract_problem_id(problem_url: str) -> str:
    """Map an Aizu Online Judge problem URL to its problem id.

    Both the legacy ``judge.u-aizu.ac.jp/onlinejudge/description.jsp?id=X``
    form and the ``onlinejudge.u-aizu.ac.jp/courses/.../X`` form are accepted.
    """

    parsed = urlparse(problem_url)
    if parsed.hostname == "judge.u-aizu.ac.jp":
        ids = parse_qs(parsed.query).get("id")
        if not ids or not ids[0]:
            raise ProblemURLError(f"problem url has no id parameter: {problem_url}")
        return ids[0]
    if parsed.hostname == "onlinejudge.u-aizu.ac.jp":
        segments = [part for part in parsed.path.split("/") if part]
        if not segments:
            raise ProblemURLError(f"problem url has no problem segment: {problem_url}")
        return segments[-1]
    raise ProblemURLError(f"unsupported url. url: {problem_url}")
