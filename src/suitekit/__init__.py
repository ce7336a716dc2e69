"""suitekit package initialization."""
from __future__ import annotations

import importlib
import logging
import os

from .core import (
    AbortSignal,
    AssertionFailure,
    BasicSetup,
    DuplicateNameError,
    EngineFault,
    Fixture,
    HarnessError,
    Outcome,
    SetupFailure,
    Status,
    TestRunner,
    check,
    disabled,
    enabled_if,
    fail,
    message,
    require,
    run_all,
)
from .registry import SuiteRegistry, TestSuite, register, registry
from .version import __version__

__all__ = [
    "__version__",
    "AbortSignal",
    "AssertionFailure",
    "BasicSetup",
    "DuplicateNameError",
    "EngineFault",
    "Fixture",
    "HarnessError",
    "Outcome",
    "SetupFailure",
    "Status",
    "SuiteRegistry",
    "TestRunner",
    "TestSuite",
    "bootstrap",
    "check",
    "disabled",
    "enabled_if",
    "fail",
    "message",
    "register",
    "registry",
    "require",
    "run_all",
]

logger = logging.getLogger(__name__)

_BOOTSTRAPPED = False


def bootstrap() -> None:
    """Initialize suitekit (idempotent)."""

    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return
    _load_plugins()
    _BOOTSTRAPPED = True


def _load_plugins() -> None:
    plugin_env = os.environ.get("SUITEKIT_PLUGINS")
    if not plugin_env:
        return
    for item in plugin_env.split(","):
        module_name = item.strip()
        if not module_name:
            continue
        module = importlib.import_module(module_name)
        register_plugin = getattr(module, "register", None)
        if callable(register_plugin):
            logger.debug("loading plugin %s", module_name)
            register_plugin()
