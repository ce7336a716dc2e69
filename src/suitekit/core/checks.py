"""Small failure primitives for test bodies."""
from __future__ import annotations

from typing import Any, NoReturn

from .errors import AssertionFailure
from .messages import current_log


def fail(reason: str = "test failed") -> NoReturn:
    raise AssertionFailure(reason)


def require(condition: Any, reason: str = "requirement failed") -> None:
    """Stop the test body with ``reason`` unless ``condition`` holds."""

    if not condition:
        raise AssertionFailure(reason)


def check(condition: Any, reason: str = "check failed") -> bool:
    """Mark the running test as failed unless ``condition`` holds.

    Unlike :func:`require` the body keeps running. Outside of a running test
    a failed check raises immediately.
    """

    if condition:
        return True
    log = current_log()
    if log is None:
        raise AssertionFailure(reason)
    log.record_failure(reason)
    return False
