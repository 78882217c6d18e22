"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

_VERDICT_LABELS = ["AC", "WA", "RE", "TLE"]

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "aoj-verify report",
    "type": "object",
    "required": ["schema_version", "generated_at", "source", "cases_dir", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "source": {"type": "string"},
        "cases_dir": {"type": "string"},
        "summary": {
            "type": "object",
            "required": ["total", "counts", "slowest_case", "slowest_time_ms", "duration_s"],
            "properties": {
                "total": {"type": "integer", "minimum": 0},
                "counts": {
                    "type": "object",
                    "required": _VERDICT_LABELS,
                    "properties": {label: {"type": "integer", "minimum": 0} for label in _VERDICT_LABELS},
                    "additionalProperties": False,
                },
                "slowest_case": {"type": ["string", "null"]},
                "slowest_time_ms": {"type": "number"},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "verdict", "duration_ms"],
                "properties": {
                    "name": {"type": "string"},
                    "verdict": {"enum": _VERDICT_LABELS},
                    "duration_ms": {"type": "number"},
                },
            },
        },
    },
}
