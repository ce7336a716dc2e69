"""YAML loader and validation for run plans."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import yaml
from jsonschema import Draft7Validator

from suitekit.core.errors import PlanError

from .models import ReportConfig, RunPlan

ALLOWED_REPORT_FORMATS = {"terminal", "json"}


def load_plan(path: str | Path) -> RunPlan:
    """Load and validate a plan file."""

    plan_path = Path(path).expanduser().resolve()
    try:
        text = plan_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PlanError(f"Cannot read plan file {plan_path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise PlanError(f"Plan file {plan_path} is not valid YAML: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise PlanError("Plan file must contain a mapping at the top level")
    return parse_plan(raw, plan_path.parent)


def parse_plan(raw: Mapping[str, Any], base: Path) -> RunPlan:
    errors = sorted(_validator.iter_errors(dict(raw)), key=lambda e: list(map(str, e.path)))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise PlanError(f"Plan schema validation failed: {messages}")
    modules = _parse_str_list(raw.get("modules"), "modules")
    if not modules:
        raise PlanError("modules cannot be empty")
    timeout = raw.get("timeout")
    return RunPlan(
        modules=modules,
        plan_dir=base,
        select=_parse_str_list(raw.get("select"), "select"),
        tags=_parse_str_list(raw.get("tags"), "tags"),
        skip_tags=_parse_str_list(raw.get("skip_tags"), "skip_tags"),
        enable=_parse_str_list(raw.get("enable"), "enable"),
        fail_fast=bool(raw.get("fail_fast", False)),
        timeout=float(timeout) if timeout is not None else None,
        report=_parse_report(raw.get("report"), base),
    )


def default_plan(modules: Sequence[str], base: Optional[Path] = None) -> RunPlan:
    """Plan used when modules are given on the command line without a plan file."""

    if not modules:
        raise PlanError("At least one test module is required")
    return RunPlan(modules=tuple(modules), plan_dir=(base or Path.cwd()).resolve())


def _parse_str_list(raw: Any, key: str) -> tuple[str, ...]:
    if raw is None:
        return tuple()
    if isinstance(raw, str):
        raw = [raw]
    values = []
    for item in raw:
        text = str(item).strip()
        if not text:
            raise PlanError(f"{key} entries cannot be empty")
        values.append(text)
    return tuple(values)


def _parse_report(raw: Any, base: Path) -> ReportConfig:
    if raw is None:
        return ReportConfig()
    if isinstance(raw, str):
        raw = {"format": raw}
    fmt = str(raw.get("format", "terminal"))
    if fmt not in ALLOWED_REPORT_FORMATS:
        raise PlanError(f"Unsupported report format '{fmt}'")
    path_raw = raw.get("path")
    path = (base / path_raw).resolve() if path_raw else None
    return ReportConfig(
        format=fmt,
        path=path,
        color=bool(raw.get("color", True)),
        messages=bool(raw.get("messages", False)),
    )


_STR_LIST = {"type": ["array", "string"], "items": {"type": "string"}}

PLAN_SCHEMA = {
    "type": "object",
    "required": ["modules"],
    "additionalProperties": False,
    "properties": {
        "modules": {"type": "array", "minItems": 1, "items": {"type": "string", "minLength": 1}},
        "select": _STR_LIST,
        "tags": _STR_LIST,
        "skip_tags": _STR_LIST,
        "enable": _STR_LIST,
        "fail_fast": {"type": "boolean"},
        "timeout": {"type": "number", "exclusiveMinimum": 0},
        "report": {
            "type": ["string", "object"],
            "properties": {
                "format": {"type": "string", "enum": sorted(ALLOWED_REPORT_FORMATS)},
                "path": {"type": "string"},
                "color": {"type": "boolean"},
                "messages": {"type": "boolean"},
            },
            "additionalProperties": False,
        },
    },
}
_validator = Draft7Validator(PLAN_SCHEMA)
