"""Result data structures produced by the test runner."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .models import Outcome, Status


@dataclass(frozen=True)
class Diagnostic:
    """Detail and messages of one failed or skipped case."""

    identifier: str
    status: Status
    detail: str
    messages: Tuple[str, ...]


@dataclass(frozen=True)
class RunSummary:
    """Totals per status plus every recorded outcome, in run order."""

    total: int
    passed: int
    failed: int
    skipped: int
    deselected: int = 0
    duration_s: float = 0.0
    aborted: bool = False
    abort_reason: Optional[str] = None
    outcomes: Tuple[Outcome, ...] = field(default_factory=tuple)

    @property
    def exit_code(self) -> int:
        return 0 if self.failed == 0 else 1

    def diagnostics(self) -> List[Diagnostic]:
        return [
            Diagnostic(
                identifier=outcome.identifier(),
                status=outcome.status,
                detail=outcome.detail,
                messages=outcome.messages,
            )
            for outcome in self.outcomes
            if outcome.status is not Status.PASSED
        ]


class ResultCollector:
    """Accumulates outcomes for one run and summarizes them."""

    def __init__(self) -> None:
        self._outcomes: List[Outcome] = []
        self._deselected = 0
        self._duration_s = 0.0
        self._abort_reason: Optional[str] = None

    def record(self, outcome: Outcome) -> None:
        self._outcomes.append(outcome)

    def note_deselected(self, count: int) -> None:
        self._deselected += count

    def note_duration(self, duration_s: float) -> None:
        self._duration_s = duration_s

    def note_abort(self, reason: Optional[str]) -> None:
        self._abort_reason = reason

    def outcomes(self) -> Tuple[Outcome, ...]:
        return tuple(self._outcomes)

    def summarize(self) -> RunSummary:
        passed = sum(1 for outcome in self._outcomes if outcome.status is Status.PASSED)
        failed = sum(1 for outcome in self._outcomes if outcome.status is Status.FAILED)
        skipped = sum(1 for outcome in self._outcomes if outcome.status is Status.SKIPPED)
        return RunSummary(
            total=len(self._outcomes),
            passed=passed,
            failed=failed,
            skipped=skipped,
            deselected=self._deselected,
            duration_s=self._duration_s,
            aborted=self._abort_reason is not None,
            abort_reason=self._abort_reason,
            outcomes=tuple(self._outcomes),
        )
