from __future__ import annotations

import hashlib
import json
from pathlib import Path

import httpx
import pytest

from aojverify.errors import FetchError
from aojverify.problem.fetcher import TestcaseFetcher, cache_dir_for

BASE_URL = "https://judgedat.u-aizu.ac.jp"

HEADERS = {
    "problemId": "ITP1_1_A",
    "headers": [
        {"serial": 1, "name": "1", "inputSize": 2, "outputSize": 4, "score": 100},
        {"serial": 2, "name": "2", "inputSize": 2, "outputSize": 4, "score": 100},
    ],
}


def _make_client(requests: list, *, fail_serial: int | None = None) -> httpx.Client:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request.url.path)
        if request.url.path.endswith("/header"):
            return httpx.Response(200, json=HEADERS)
        serial = int(request.url.path.rsplit("/", 1)[-1])
        if serial == fail_serial:
            return httpx.Response(500, text="boom")
        body = {"problemId": "ITP1_1_A", "serial": serial, "in": f"{serial}\n", "out": f"out{serial}\n"}
        return httpx.Response(200, content=json.dumps(body))

    return httpx.Client(transport=httpx.MockTransport(handler), base_url=BASE_URL)


def test_cache_dir_is_keyed_by_url_md5(tmp_path: Path) -> None:
    url = "https://onlinejudge.u-aizu.ac.jp/problems/ITP1_1_A"
    digest = hashlib.md5(url.encode()).hexdigest()
    assert cache_dir_for(tmp_path, url) == tmp_path / "cache" / digest / "test"


def test_fetch_headers() -> None:
    requests: list = []
    with _make_client(requests) as client:
        headers = TestcaseFetcher(client=client, interval=0).fetch_headers("ITP1_1_A")
    assert [(h.serial, h.name, h.score) for h in headers] == [(1, "1", 100), (2, "2", 100)]
    assert requests == ["/testcases/ITP1_1_A/header"]


def test_sync_downloads_missing_cases_only(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    (cache_dir / "1.in").write_text("cached\n", encoding="utf-8")
    (cache_dir / "1.out").write_text("cached\n", encoding="utf-8")
    requests: list = []
    with _make_client(requests) as client:
        downloaded = TestcaseFetcher(client=client, interval=0).sync("ITP1_1_A", cache_dir)
    assert downloaded == ["2"]
    assert requests == ["/testcases/ITP1_1_A/header", "/testcases/ITP1_1_A/2"]
    assert (cache_dir / "2.in").read_bytes() == b"2\n"
    assert (cache_dir / "2.out").read_bytes() == b"out2\n"
    assert (cache_dir / "1.in").read_text(encoding="utf-8") == "cached\n"


def test_sync_collects_failures(tmp_path: Path) -> None:
    cache_dir = tmp_path / "cache"
    requests: list = []
    with _make_client(requests, fail_serial=1) as client:
        fetcher = TestcaseFetcher(client=client, interval=0)
        with pytest.raises(FetchError) as exc:
            fetcher.sync("ITP1_1_A", cache_dir)
    assert len(exc.value.errors) == 1
    assert not (cache_dir / "1.in").exists()
    assert (cache_dir / "2.in").exists()


def test_header_failure_is_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="not found")

    with httpx.Client(transport=httpx.MockTransport(handler), base_url=BASE_URL) as client:
        with pytest.raises(FetchError):
            TestcaseFetcher(client=client, interval=0).fetch_headers("NOPE")


def test_sync_without_headers_creates_empty_cache(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"problemId": "EMPTY", "headers": []})

    cache_dir = tmp_path / "cache" / "test"
    with httpx.Client(transport=httpx.MockTransport(handler), base_url=BASE_URL) as client:
        downloaded = TestcaseFetcher(client=client, interval=0).sync("EMPTY", cache_dir)
    assert downloaded == []
    assert cache_dir.is_dir()
    assert list(cache_dir.iterdir()) == []
