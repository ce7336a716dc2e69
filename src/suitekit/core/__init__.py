"""Core models and helpers exposed at the package level."""
from .abort import AbortSignal
from .checks import check, fail, require
from .errors import (
    AssertionFailure,
    DuplicateNameError,
    EngineFault,
    HarnessError,
    PlanError,
    RegistrationClosedError,
    SetupFailure,
    TeardownFailure,
)
from .fixtures import BasicSetup, Fixture, FixtureScope
from .messages import MessageLog, message
from .models import Outcome, Predicate, Selection, Status, Suite, TestCase, disabled, enabled_if
from .results import Diagnostic, ResultCollector, RunSummary
from .runner import TestRunner, run_all

__all__ = [
    "AbortSignal",
    "AssertionFailure",
    "BasicSetup",
    "Diagnostic",
    "DuplicateNameError",
    "EngineFault",
    "Fixture",
    "FixtureScope",
    "HarnessError",
    "PlanError",
    "MessageLog",
    "Outcome",
    "Predicate",
    "RegistrationClosedError",
    "ResultCollector",
    "RunSummary",
    "Selection",
    "SetupFailure",
    "Status",
    "Suite",
    "TeardownFailure",
    "TestCase",
    "TestRunner",
    "check",
    "disabled",
    "enabled_if",
    "fail",
    "message",
    "require",
    "run_all",
]
