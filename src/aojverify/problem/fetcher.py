"""Download of AOJ test data into the local cache directory."""
from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

import httpx

from aojverify.core.models import INPUT_SUFFIX, OUTPUT_SUFFIX
from aojverify.errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://judgedat.u-aizu.ac.jp"
DEFAULT_FETCH_INTERVAL = 3.0
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class TestcaseHeader:
    __test__ = False  # not a pytest class

    serial: int
    name: str
    input_size: int = 0
    output_size: int = 0
    score: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TestcaseHeader":
        return cls(
            serial=int(data["serial"]),
            name=str(data["name"]),
            input_size=int(data.get("inputSize", 0)),
            output_size=int(data.get("outputSize", 0)),
            score=int(data.get("score", 0)),
        )


@dataclass(frozen=True)
class TestcasePayload:
    __test__ = False  # not a pytest class

    serial: int
    input: str
    output: str


def cache_dir_for(work_dir: Path, problem_url: str) -> Path:
    """Cache location for one problem, keyed by the MD5 of its URL."""

    digest = hashlib.md5(problem_url.encode("utf-8")).hexdigest()
    return Path(work_dir) / "cache" / digest / "test"


def is_cached(cache_dir: Path, name: str) -> bool:
    return (Path(cache_dir) / f"{name}{INPUT_SUFFIX}").exists()


class TestcaseFetcher:
    """Fetches headers and test-case pairs from the AOJ judge data API."""

    __test__ = False  # not a pytest class

    def __init__(
        self,
        *,
        api_base_url: str = DEFAULT_API_BASE_URL,
        interval: float = DEFAULT_FETCH_INTERVAL,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._interval = interval
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=api_base_url, timeout=DEFAULT_HTTP_TIMEOUT)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "TestcaseFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_headers(self, problem_id: str) -> List[TestcaseHeader]:
        try:
            data = self._get_json(f"/testcases/{problem_id}/header")
            return [TestcaseHeader.from_mapping(entry) for entry in data.get("headers") or []]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise FetchError([f"failed to fetch testcase headers of {problem_id}: {exc}"]) from exc

    def fetch_testcase(self, problem_id: str, serial: int) -> TestcasePayload:
        data = self._get_json(f"/testcases/{problem_id}/{serial}")
        return TestcasePayload(
            serial=int(data.get("serial", serial)),
            input=str(data["in"]),
            output=str(data["out"]),
        )

    def sync(self, problem_id: str, cache_dir: Path) -> List[str]:
        """Download every test case missing from ``cache_dir``.

        Failures of individual cases do not stop the loop; they are raised
        together as one ``FetchError`` once every header has been visited.
        Returns the names of the cases that were downloaded.
        """

        cache_dir = Path(cache_dir)
        headers = self.fetch_headers(problem_id)
        try:
            cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FetchError([f"failed to create {cache_dir}: {exc}"]) from exc
        downloaded: List[str] = []
        errors: List[str] = []
        for header in headers:
            if is_cached(cache_dir, header.name):
                logger.debug("cached: %s", header.name)
                continue
            try:
                payload = self.fetch_testcase(problem_id, header.serial)
                in_path, out_path = _save_testcase(cache_dir, header.name, payload)
            except (httpx.HTTPError, OSError, ValueError, KeyError, TypeError) as exc:
                logger.error("failed to fetch testcase %s: %s", header.name, exc)
                errors.append(f"{header.name}: {exc}")
            else:
                logger.info("download and saved: %s, %s", in_path, out_path)
                downloaded.append(header.name)
            if self._interval > 0:
                time.sleep(self._interval)
        if errors:
            raise FetchError(errors)
        return downloaded

    def _get_json(self, path: str) -> Mapping[str, Any]:
        response = self._client.get(path)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, Mapping):
            raise ValueError(f"unexpected response body from {path}")
        return data


def _save_testcase(cache_dir: Path, name: str, payload: TestcasePayload) -> tuple[Path, Path]:
    cache_dir.mkdir(parents=True, exist_ok=True)
    in_path = cache_dir / f"{name}{INPUT_SUFFIX}"
    out_path = cache_dir / f"{name}{OUTPUT_SUFFIX}"
    # .out goes first so a half-written pair is never treated as cached
    out_path.write_bytes(payload.output.encode("utf-8"))
    in_path.write_bytes(payload.input.encode("utf-8"))
    return in_path, out_path
