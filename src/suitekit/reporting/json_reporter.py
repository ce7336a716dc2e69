"""JSON reporter emitting structured execution results."""
from __future__ import annotations

import datetime as dt
import json
import pathlib
from typing import Any, Dict, Optional, Sequence

import click
from jsonschema import validate

from suitekit.core.models import Outcome, TestCase
from suitekit.core.results import RunSummary

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION


class JsonReporter(Reporter):
    """Writes results as JSON validated against the schema.

    Without a path the document is printed to stdout.
    """

    def __init__(self, path: Optional[str | pathlib.Path] = None) -> None:
        self._path = pathlib.Path(path) if path is not None else None
        self._records: list[Dict[str, Any]] = []

    @property
    def path(self) -> Optional[pathlib.Path]:
        return self._path

    def on_start(self, cases: Sequence[TestCase]) -> None:
        self._records.clear()

    def on_case_result(self, outcome: Outcome, index: int, total: int) -> None:
        self._records.append(_outcome_to_dict(outcome))

    def on_complete(self, summary: RunSummary) -> None:
        text = json.dumps(build_payload(summary, self._records), indent=2)
        if self._path is None:
            click.echo(text)
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(text, encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def build_payload(summary: RunSummary, records: Optional[Sequence[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Build and validate the report document for ``summary``."""

    cases = list(records) if records is not None else [_outcome_to_dict(outcome) for outcome in summary.outcomes]
    payload = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "summary": {
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "skipped": summary.skipped,
            "deselected": summary.deselected,
            "aborted": summary.aborted,
            "abort_reason": summary.abort_reason,
            "duration_s": summary.duration_s,
        },
        "cases": cases,
    }
    validate(instance=payload, schema=JSON_SCHEMA_V1)
    return payload


def _outcome_to_dict(outcome: Outcome) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": outcome.identifier(),
        "suite": outcome.suite,
        "test": outcome.test,
        "status": outcome.status.value,
        "duration_ms": outcome.duration_s * 1000,
        "messages": list(outcome.messages),
    }
    if outcome.detail:
        record["detail"] = outcome.detail
    return record
