"""Test runner walking the registry and executing enabled cases."""
from __future__ import annotations

import fnmatch
import logging
import time
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from suitekit.reporting.base import ReportManager, Reporter

from .abort import AbortSignal
from .errors import AssertionFailure, EngineFault, SetupFailure, TeardownFailure
from .fixtures import FixtureScope
from .messages import MessageLog
from .models import Outcome, Predicate, Selection, Status, Suite, TestCase
from .results import ResultCollector, RunSummary

if TYPE_CHECKING:  # pragma: no cover
    from suitekit.registry.registry import SuiteRegistry

logger = logging.getLogger(__name__)

_PlannedSuite = Tuple[Suite, Tuple[TestCase, ...]]


class _RunnerFault(EngineFault):
    """Raised only by the runner's own bookkeeping checks."""


class TestRunner:
    """Executes registered suites sequentially, in registration order."""

    __test__ = False  # keep pytest from collecting this class

    def __init__(
        self,
        reporters: Optional[Sequence[Reporter]] = None,
        *,
        abort: Optional[AbortSignal] = None,
        fail_fast: bool = False,
        selection: Optional[Selection] = None,
    ) -> None:
        self._reports = ReportManager(reporters or ())
        self._abort = abort or AbortSignal()
        self._fail_fast = fail_fast
        self._selection = selection or Selection()
        self._live_scope: Optional[FixtureScope] = None

    @property
    def abort_signal(self) -> AbortSignal:
        return self._abort

    def collect(self, registry: "SuiteRegistry") -> List[TestCase]:
        """Return the selected cases in execution order without running them."""

        planned, _ = self._plan(registry.suites())
        return [case for _, cases in planned for case in cases]

    def run(self, registry: "SuiteRegistry") -> RunSummary:
        registry.freeze()
        revision = registry.revision
        planned, deselected = self._plan(registry.suites())
        cases = [case for _, suite_cases in planned for case in suite_cases]
        total = len(cases)
        collector = ResultCollector()
        collector.note_deselected(deselected)
        self._reports.start(cases)
        self._abort.start()
        start = time.perf_counter()
        index = 0
        for suite, suite_cases in planned:
            if registry.revision != revision:
                raise _RunnerFault(f"Registry changed during execution (revision {revision} -> {registry.revision})")
            if not suite_cases:
                continue
            if self._abort.requested():
                # every case below is skipped as aborted; leave the predicate alone
                suite_enabled, suite_error = False, None
            else:
                suite_enabled, suite_error = _evaluate(suite.enabled)
            if not suite_enabled and suite_error is None:
                logger.debug("suite %s is disabled", suite.name)
            for case in suite_cases:
                index += 1
                outcome = self._run_case(suite, case, suite_enabled, suite_error)
                collector.record(outcome)
                self._reports.handle_result(outcome, index, total)
                if self._fail_fast and outcome.status is Status.FAILED:
                    self._abort.request("fail-fast")
        collector.note_duration(time.perf_counter() - start)
        collector.note_abort(self._abort.reason)
        summary = collector.summarize()
        logger.info(
            "run finished: total=%d passed=%d failed=%d skipped=%d",
            summary.total,
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        self._reports.complete(summary)
        return summary

    def _plan(self, suites: Sequence[Suite]) -> Tuple[List[_PlannedSuite], int]:
        planned: List[_PlannedSuite] = []
        deselected = 0
        for suite in suites:
            chosen = tuple(case for case in suite.cases if self._selected(suite, case))
            deselected += len(suite.cases) - len(chosen)
            planned.append((suite, chosen))
        return planned, deselected

    def _selected(self, suite: Suite, case: TestCase) -> bool:
        selection = self._selection
        identifier = case.identifier()
        if selection.patterns and not any(_match(pattern, suite, identifier) for pattern in selection.patterns):
            return False
        tags = set(suite.tags) | set(case.tags)
        if selection.tags and not tags & set(selection.tags):
            return False
        if selection.skip_tags and tags & set(selection.skip_tags):
            return False
        return True

    def _forced(self, suite: Suite, case: TestCase) -> bool:
        identifier = case.identifier()
        return any(_match(pattern, suite, identifier) for pattern in self._selection.force_enable)

    def _run_case(
        self,
        suite: Suite,
        case: TestCase,
        suite_enabled: bool,
        suite_error: Optional[str],
    ) -> Outcome:
        if self._abort.requested():
            return _skipped(case, f"run aborted: {self._abort.reason}")
        forced = self._forced(suite, case)
        if not forced:
            if suite_error is not None:
                return _failed(case, f"suite enablement check raised {suite_error}")
            if not suite_enabled:
                return _skipped(case, f"suite '{suite.name}' is disabled")
            case_enabled, case_error = _evaluate(case.enabled)
            if case_error is not None:
                return _failed(case, f"enablement check raised {case_error}")
            if not case_enabled:
                return _skipped(case, f"test '{case.identifier()}' is disabled")
        return self._execute_case(case)

    def _execute_case(self, case: TestCase) -> Outcome:
        if self._live_scope is not None:
            raise _RunnerFault(f"Fixture still live when starting '{case.identifier()}'")
        log = MessageLog()
        scope = FixtureScope(case.fixture)
        self._live_scope = scope
        start = time.perf_counter()
        problems: List[str] = []
        try:
            with scope as fixture:
                with log.capture():
                    case.invoke(fixture)
        except SetupFailure as exc:
            problems.append(f"setup failed: {exc}")
        except TeardownFailure as exc:
            body_error = exc.body_error
            if body_error is not None and not isinstance(body_error, Exception):
                raise body_error
            if body_error is not None:
                problems.append(describe_failure(body_error))
            problems.append(f"teardown failed: {exc}")
        except _RunnerFault:
            raise
        except Exception as exc:
            problems.append(describe_failure(exc))
        finally:
            self._live_scope = None
        duration = time.perf_counter() - start
        problems[:0] = log.failures()
        if problems:
            logger.debug("test %s failed: %s", case.identifier(), problems[-1])
            return Outcome(
                suite=case.suite,
                test=case.name,
                status=Status.FAILED,
                messages=log.messages(),
                detail="; ".join(problems),
                duration_s=duration,
            )
        return Outcome(
            suite=case.suite,
            test=case.name,
            status=Status.PASSED,
            messages=log.messages(),
            duration_s=duration,
        )


def run_all(
    registry: Optional["SuiteRegistry"] = None,
    reporters: Optional[Sequence[Reporter]] = None,
    *,
    abort: Optional[AbortSignal] = None,
    fail_fast: bool = False,
    selection: Optional[Selection] = None,
) -> int:
    """Run every registered suite and return the process exit status."""

    if registry is None:
        from suitekit.registry import registry as default_registry

        registry = default_registry
    if reporters is None:
        from suitekit.reporting.terminal import TerminalReporter

        reporters = [TerminalReporter()]
    runner = TestRunner(reporters, abort=abort, fail_fast=fail_fast, selection=selection)
    return runner.run(registry).exit_code


def describe_failure(exc: BaseException) -> str:
    if isinstance(exc, AssertionFailure):
        return str(exc) or "assertion failed"
    if isinstance(exc, AssertionError):
        text = str(exc)
        return f"assertion failed: {text}" if text else "assertion failed"
    return f"{type(exc).__name__}: {exc}"


def _evaluate(predicate: Predicate) -> Tuple[bool, Optional[str]]:
    try:
        return predicate(), None
    except Exception as exc:
        return False, f"{type(exc).__name__}: {exc}"


def _match(pattern: str, suite: Suite, identifier: str) -> bool:
    return pattern == suite.name or fnmatch.fnmatchcase(identifier, pattern)


def _skipped(case: TestCase, reason: str) -> Outcome:
    return Outcome(suite=case.suite, test=case.name, status=Status.SKIPPED, detail=reason)


def _failed(case: TestCase, reason: str) -> Outcome:
    return Outcome(suite=case.suite, test=case.name, status=Status.FAILED, detail=reason)
