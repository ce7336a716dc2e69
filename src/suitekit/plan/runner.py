"""Executor for run plans."""
from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import List, Optional

import click

from suitekit.core.abort import AbortSignal
from suitekit.core.models import Selection
from suitekit.core.runner import TestRunner
from suitekit.registry.registry import SuiteRegistry
from suitekit.reporting.base import Reporter
from suitekit.reporting.json_reporter import JsonReporter
from suitekit.reporting.terminal import TerminalReporter

from .custom import register_modules
from .models import PlanOptions, ReportConfig, RunPlan

logger = logging.getLogger(__name__)


def run_plan(
    plan: RunPlan,
    options: Optional[PlanOptions] = None,
    *,
    registry: Optional[SuiteRegistry] = None,
    abort: Optional[AbortSignal] = None,
) -> int:
    """Register the plan's modules, run them and return the exit status."""

    options = options or PlanOptions()
    plan = merge_options(plan, options)
    if registry is None:
        from suitekit.registry import registry as default_registry

        registry = default_registry
    register_modules(plan.modules, plan.plan_dir, registry)
    selection = Selection(
        patterns=tuple(plan.select),
        tags=tuple(plan.tags),
        skip_tags=tuple(plan.skip_tags),
        force_enable=tuple(plan.enable),
    )
    signal = abort or AbortSignal(timeout=plan.timeout)
    runner = TestRunner(_build_reporters(plan.report), abort=signal, fail_fast=plan.fail_fast, selection=selection)
    cases = runner.collect(registry)
    if options.list_only:
        for case in cases:
            click.echo(case.identifier())
        return 0
    if not cases and (plan.select or plan.tags or plan.skip_tags):
        click.echo("No cases matched the provided filters.")
        return 1
    summary = runner.run(registry)
    return summary.exit_code


def merge_options(plan: RunPlan, options: PlanOptions) -> RunPlan:
    """Apply command-line overrides on top of the plan file values."""

    report = plan.report
    report_path = Path(options.report_path).resolve() if options.report_path else report.path
    report = ReportConfig(
        format=options.report_format or report.format,
        path=report_path,
        color=report.color if options.color is None else options.color,
        messages=report.messages if options.messages is None else options.messages,
    )
    return dataclasses.replace(
        plan,
        modules=tuple(plan.modules) + tuple(options.modules),
        select=tuple(options.select) or tuple(plan.select),
        tags=tuple(options.tags) or tuple(plan.tags),
        skip_tags=tuple(options.skip_tags) or tuple(plan.skip_tags),
        enable=tuple(plan.enable) + tuple(options.enable),
        fail_fast=plan.fail_fast if options.fail_fast is None else options.fail_fast,
        timeout=options.timeout if options.timeout is not None else plan.timeout,
        report=report,
    )


def _build_reporters(config: ReportConfig) -> List[Reporter]:
    if config.format == "json":
        return [JsonReporter(config.path)]
    return [TerminalReporter(use_color=config.color, show_messages=config.messages)]
