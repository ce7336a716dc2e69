"""Resolve ``module:function`` references to registration hooks."""
from __future__ import annotations

import importlib
from typing import Any, Callable

from suitekit.core.errors import PlanError


def import_hook(reference: str) -> Callable[..., Any]:
    """Import ``module:function`` and return the callable it names."""

    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise PlanError(f"Hook reference '{reference}' must look like 'module:function'")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise PlanError(f"Module '{module_name}' has no attribute '{attr}'") from exc
    if not callable(target):
        raise PlanError(f"Registration hook '{reference}' is not callable")
    return target
