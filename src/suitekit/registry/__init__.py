"""Suite registry public API."""
from .declarations import CaseSpec, TestSuite
from .registry import (
    SuiteRegistry,
    add_suite,
    clear_registry,
    declare_suite,
    register,
    registry,
)

__all__ = [
    "CaseSpec",
    "SuiteRegistry",
    "TestSuite",
    "add_suite",
    "clear_registry",
    "declare_suite",
    "register",
    "registry",
]
