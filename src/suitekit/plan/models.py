"""Data models for run plans."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence


@dataclass(frozen=True)
class ReportConfig:
    format: str = "terminal"
    path: Optional[Path] = None
    color: bool = True
    messages: bool = False


@dataclass(frozen=True)
class RunPlan:
    modules: Sequence[str]
    plan_dir: Path
    select: Sequence[str] = field(default_factory=tuple)
    tags: Sequence[str] = field(default_factory=tuple)
    skip_tags: Sequence[str] = field(default_factory=tuple)
    enable: Sequence[str] = field(default_factory=tuple)
    fail_fast: bool = False
    timeout: Optional[float] = None
    report: ReportConfig = field(default_factory=ReportConfig)


@dataclass(frozen=True)
class PlanOptions:
    """Command-line overrides; ``None`` and empty values keep the plan's setting."""

    modules: Sequence[str] = field(default_factory=tuple)
    select: Sequence[str] = field(default_factory=tuple)
    tags: Sequence[str] = field(default_factory=tuple)
    skip_tags: Sequence[str] = field(default_factory=tuple)
    enable: Sequence[str] = field(default_factory=tuple)
    fail_fast: Optional[bool] = None
    timeout: Optional[float] = None
    report_format: Optional[str] = None
    report_path: Optional[str] = None
    color: Optional[bool] = None
    messages: Optional[bool] = None
    list_only: bool = False
