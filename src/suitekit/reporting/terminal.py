"""Terminal reporter rendering progress and summaries."""
from __future__ import annotations

import time
from typing import Sequence

import click
import colorama

from suitekit.core.models import Outcome, Status, TestCase
from suitekit.core.results import RunSummary

from .base import Reporter


STATUS_COLORS = {
    "passed": "green",
    "failed": "red",
    "skipped": "yellow",
}


class TerminalReporter(Reporter):
    """Human-readable reporter that streams to stdout."""

    def __init__(self, *, use_color: bool = True, show_messages: bool = False) -> None:
        self._use_color = use_color
        self._show_messages = show_messages
        self._start_time = 0.0
        self._failures: list[tuple[int, Outcome]] = []

    def on_start(self, cases: Sequence[TestCase]) -> None:
        if self._use_color:
            colorama.just_fix_windows_console()
        self._start_time = time.perf_counter()
        self._failures.clear()
        suites = len({case.suite for case in cases})
        click.echo(self._styled(f"Starting run: {len(cases)} case(s) in {suites} suite(s)", force_color="cyan"))

    def on_case_result(self, outcome: Outcome, index: int, total: int) -> None:
        ms = outcome.duration_s * 1000
        status_text = self._styled(outcome.status.value.upper())
        click.echo(f"[{index}/{total}] {outcome.identifier()} -> {status_text} ({ms:.2f} ms)")
        if outcome.status is Status.FAILED:
            self._failures.append((index, outcome))
        if outcome.status is not Status.PASSED or self._show_messages:
            self._print_details(outcome)

    def on_complete(self, summary: RunSummary) -> None:
        duration = time.perf_counter() - self._start_time
        line = (
            f"Summary: total={summary.total} passed={summary.passed} failed={summary.failed} "
            f"skipped={summary.skipped}"
        )
        if summary.deselected:
            line += f" deselected={summary.deselected}"
        click.echo(self._styled(line + f" duration={duration:.2f}s", force_color="cyan"))
        if summary.aborted:
            click.echo(self._styled(f"Run aborted: {summary.abort_reason}", force_color="yellow"))
        if self._failures:
            click.echo(self._styled("Failure details:", force_color="red"))
            for index, outcome in self._failures:
                click.echo(f"  [{index}] {outcome.identifier()} -> {outcome.status.value}")
                self._print_details(outcome, indent="    ")

    def _styled(self, text: str, *, force_color: str | None = None) -> str:
        if not self._use_color:
            return text
        color = force_color or STATUS_COLORS.get(text.lower(), None)
        if color:
            return click.style(text, fg=color)
        return text

    def _print_details(self, outcome: Outcome, *, indent: str = "    ") -> None:
        if outcome.detail:
            label = "reason" if outcome.status is Status.SKIPPED else "error"
            click.echo(f"{indent}{label}: {outcome.detail}")
        for text in outcome.messages:
            click.echo(f"{indent}message: {text}")
