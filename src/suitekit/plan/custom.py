"""Helpers for loading user-provided test modules."""
from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Sequence

from suitekit.core.errors import HarnessError, PlanError
from suitekit.registry.declarations import TestSuite
from suitekit.registry.registry import SuiteRegistry
from suitekit.utils.importing import import_hook

logger = logging.getLogger(__name__)

RegistrationHook = Callable[[SuiteRegistry], Any]


def load_from_source(source: Path) -> ModuleType:
    """Import the Python file at ``source`` as a fresh module."""

    path = source.expanduser().resolve()
    if not path.exists():
        raise PlanError(f"Test module file not found: {path}")
    module_name = f"suitekit_tests_{path.stem}_{hash(str(path)) & 0xFFFF:x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise PlanError(f"Unable to load module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module


def resolve_hook(entry: str, base: Path) -> RegistrationHook:
    """Turn a plan ``modules`` entry into its registration hook.

    Entries are a Python file path (relative to ``base``), a dotted module
    name, or ``module:function`` naming the hook explicitly.
    """

    candidate = Path(entry).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    try:
        if entry.endswith(".py") or candidate.is_file():
            return _module_hook(load_from_source(candidate), entry)
        if ":" in entry:
            return import_hook(entry)
        return _module_hook(importlib.import_module(entry), entry)
    except PlanError:
        raise
    except Exception as exc:
        raise PlanError(f"Failed to load test module '{entry}': {type(exc).__name__}: {exc}") from exc


def register_modules(entries: Sequence[str], base: Path, registry: SuiteRegistry) -> None:
    """Load ``entries`` in order and call each registration hook."""

    for entry in entries:
        hook = resolve_hook(entry, base)
        logger.debug("registering tests from %s", entry)
        try:
            hook(registry)
        except HarnessError:
            raise
        except Exception as exc:
            raise PlanError(f"Registering '{entry}' failed: {type(exc).__name__}: {exc}") from exc


def _module_hook(module: ModuleType, entry: str) -> RegistrationHook:
    hook = getattr(module, "register", None)
    if callable(hook):
        return hook
    declared = [value for value in vars(module).values() if isinstance(value, TestSuite)]
    if not declared:
        raise PlanError(f"Module '{entry}' has no register() hook and declares no TestSuite")

    def register_declared(registry: SuiteRegistry) -> None:
        for declaration in declared:
            registry.add_suite(declaration)

    return register_declared
