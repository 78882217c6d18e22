"""YAML settings loader and validation."""
from __future__ import annotations

import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from aojverify.core.build import DEFAULT_BUILD_COMMAND, DEFAULT_RUN_COMMAND, Toolchain
from aojverify.errors import ConfigError
from aojverify.problem.fetcher import DEFAULT_API_BASE_URL, DEFAULT_FETCH_INTERVAL

DEFAULT_CONFIG_NAME = ".aoj-verify.yaml"
DEFAULT_WORK_DIR = ".aoj-verify"

_COMMAND_SCHEMA = {
    "oneOf": [
        {"type": "string", "minLength": 1},
        {"type": "array", "minItems": 1, "items": {"type": "string"}},
    ]
}

SETTINGS_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "work_dir": {"type": "string", "minLength": 1},
        "api_base_url": {"type": "string", "minLength": 1},
        "fetch_interval": {"type": "number", "minimum": 0},
        "time_limit": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "build": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "command": _COMMAND_SCHEMA,
                "run": _COMMAND_SCHEMA,
                "env": {"type": "object", "additionalProperties": {"type": ["string", "number", "boolean"]}},
                "timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
            },
        },
    },
}
_validator = Draft7Validator(SETTINGS_SCHEMA)


@dataclass(frozen=True)
class Settings:
    work_dir: Path = Path(DEFAULT_WORK_DIR)
    api_base_url: str = DEFAULT_API_BASE_URL
    fetch_interval: float = DEFAULT_FETCH_INTERVAL
    time_limit: Optional[float] = None
    toolchain: Toolchain = field(default_factory=Toolchain)

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with every non-None override applied."""

        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from ``path``, or from ``.aoj-verify.yaml`` when present.

    Without an explicit path and without a default file, built-in defaults
    are returned.
    """

    if path is None:
        default = Path(DEFAULT_CONFIG_NAME)
        if not default.is_file():
            return Settings()
        config_path = default.resolve()
    else:
        config_path = Path(path).expanduser().resolve()
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ConfigError(f"Failed to read settings file {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Settings file {config_path} is not valid YAML: {exc}") from exc
    return parse_settings(raw, config_path.parent)


def parse_settings(raw: Any, base: Path) -> Settings:
    if not isinstance(raw, Mapping):
        raise ConfigError("Settings file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ConfigError(f"Settings schema validation failed: {messages}")
    work_dir_raw = raw.get("work_dir")
    work_dir = (base / work_dir_raw) if work_dir_raw else Path(DEFAULT_WORK_DIR)
    time_limit = raw.get("time_limit")
    return Settings(
        work_dir=work_dir,
        api_base_url=str(raw.get("api_base_url", DEFAULT_API_BASE_URL)),
        fetch_interval=float(raw.get("fetch_interval", DEFAULT_FETCH_INTERVAL)),
        time_limit=float(time_limit) if time_limit is not None else None,
        toolchain=_parse_toolchain(raw.get("build") or {}),
    )


def _parse_toolchain(raw: Mapping[str, Any]) -> Toolchain:
    build_command = _normalize_command(raw.get("command"), DEFAULT_BUILD_COMMAND)
    run_command = _normalize_command(raw.get("run"), DEFAULT_RUN_COMMAND)
    env = {str(k): str(v) for k, v in (raw.get("env") or {}).items()}
    timeout = raw.get("timeout")
    toolchain = Toolchain(
        build_command=build_command,
        run_command=run_command,
        env=env,
        build_timeout=float(timeout) if timeout is not None else None,
    )
    toolchain.check_tokens()
    return toolchain


def _normalize_command(raw: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if raw is None:
        return default
    if isinstance(raw, str):
        return tuple(shlex.split(raw))
    return tuple(str(part) for part in raw)
