from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from aojverify.config import Settings, load_settings
from aojverify.core.build import DEFAULT_BUILD_COMMAND
from aojverify.errors import ConfigError


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "settings.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    settings = load_settings()
    assert settings == Settings()
    assert tuple(settings.toolchain.build_command) == DEFAULT_BUILD_COMMAND
    assert settings.time_limit is None


def test_default_file_in_working_directory(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".aoj-verify.yaml").write_text("time_limit: 2\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_settings().time_limit == 2.0


def test_full_settings(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        work_dir: build/aoj
        fetch_interval: 0.5
        time_limit: 1.5
        build:
          command: g++ -O2 -o {output} {source}
          run: ["{binary}"]
          env: {LANG: C}
          timeout: 60
        """,
    )
    settings = load_settings(str(path))
    assert settings.work_dir == tmp_path / "build" / "aoj"
    assert settings.fetch_interval == 0.5
    assert settings.time_limit == 1.5
    assert tuple(settings.toolchain.build_command) == ("g++", "-O2", "-o", "{output}", "{source}")
    assert tuple(settings.toolchain.run_command) == ("{binary}",)
    assert dict(settings.toolchain.env) == {"LANG": "C"}
    assert settings.toolchain.build_timeout == 60.0


def test_schema_errors_are_reported(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        time_limit: -1
        unknown_key: true
        """,
    )
    with pytest.raises(ConfigError) as exc:
        load_settings(str(path))
    message = str(exc.value)
    assert "time_limit" in message
    assert "unknown_key" in message


def test_invalid_yaml(tmp_path: Path) -> None:
    path = _write(tmp_path, "build: [unclosed\n")
    with pytest.raises(ConfigError):
        load_settings(str(path))


def test_with_overrides_ignores_none() -> None:
    settings = Settings(time_limit=3.0)
    assert settings.with_overrides(time_limit=None).time_limit == 3.0
    assert settings.with_overrides(time_limit=1.0).time_limit == 1.0


def test_unknown_command_token_is_config_error(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        build:
          command: "go build -o {out} {source}"
        """,
    )
    with pytest.raises(ConfigError) as exc:
        load_settings(str(path))
    assert "Unknown token 'out'" in str(exc.value)
    assert "Available tokens: output, source" in str(exc.value)
