"""Run plan loader and executor."""

from .custom import load_from_source, register_modules, resolve_hook
from .loader import default_plan, load_plan, parse_plan
from .models import PlanOptions, ReportConfig, RunPlan
from .runner import merge_options, run_plan

__all__ = [
    "PlanOptions",
    "ReportConfig",
    "RunPlan",
    "default_plan",
    "load_from_source",
    "load_plan",
    "merge_options",
    "parse_plan",
    "register_modules",
    "resolve_hook",
    "run_plan",
]
