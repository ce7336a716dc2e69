"""Exception hierarchy shared across suitekit subsystems."""
from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base class for errors raised by the harness itself."""


class DuplicateNameError(HarnessError):
    """Two registrations resolve to the same suite or test identity."""


class RegistrationClosedError(HarnessError):
    """The registry was mutated after it was frozen for execution."""


class AssertionFailure(HarnessError, AssertionError):
    """A check inside a test body did not hold."""


class SetupFailure(HarnessError):
    """Fixture construction or setup raised."""


class TeardownFailure(HarnessError):
    """Fixture teardown raised.

    ``body_error`` holds the exception the test body raised before teardown,
    if any, so both can be reported.
    """

    def __init__(self, message: str, body_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.body_error = body_error


class EngineFault(HarnessError):
    """Run-time bookkeeping is inconsistent; the run cannot continue.

    Only faults detected by the runner itself end the run. A test body that
    raises ``EngineFault`` fails like any other test.
    """


class PlanError(HarnessError, ValueError):
    """A run plan is invalid or one of its modules cannot be loaded."""
