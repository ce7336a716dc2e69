"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "suitekit report",
    "type": "object",
    "required": ["schema_version", "generated_at", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "skipped", "deselected", "aborted", "duration_s"],
            "properties": {
                "total": {"type": "integer", "minimum": 0},
                "passed": {"type": "integer", "minimum": 0},
                "failed": {"type": "integer", "minimum": 0},
                "skipped": {"type": "integer", "minimum": 0},
                "deselected": {"type": "integer", "minimum": 0},
                "aborted": {"type": "boolean"},
                "abort_reason": {"type": ["string", "null"]},
                "duration_s": {"type": "number"},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "suite", "test", "status", "duration_ms", "messages"],
                "properties": {
                    "id": {"type": "string"},
                    "suite": {"type": "string"},
                    "test": {"type": "string"},
                    "status": {"type": "string", "enum": ["passed", "failed", "skipped"]},
                    "duration_ms": {"type": "number"},
                    "detail": {"type": "string"},
                    "messages": {"type": "array", "items": {"type": "string"}},
                },
            },
        },
    },
}
