"""Fixture lifecycle management.

A fixture is any zero-argument callable (usually a class). Calling it is the
start of setup; if the resulting object has a ``setup()`` method it is called
next. If the object has a ``teardown()`` method it is called exactly once when
the scope closes, whatever happened inside the scope. A failed setup means
nothing was acquired, so teardown is not attempted.
"""
from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, List, Optional, Type

from .errors import SetupFailure, TeardownFailure
from .models import FixtureFactory

logger = logging.getLogger(__name__)


class Fixture:
    """Optional base class for fixtures with explicit hooks."""

    def setup(self) -> None:
        """Acquire resources for one test case."""

    def teardown(self) -> None:
        """Release whatever :meth:`setup` acquired."""


class BasicSetup(Fixture):
    """Minimal fixture that only tracks its own lifecycle."""

    def __init__(self) -> None:
        self.events: List[str] = ["constructed"]
        self.active = False

    def setup(self) -> None:
        self.events.append("setup")
        self.active = True

    def teardown(self) -> None:
        self.events.append("teardown")
        self.active = False


def describe_factory(factory: Optional[FixtureFactory]) -> str:
    if factory is None:
        return "<none>"
    return getattr(factory, "__qualname__", None) or getattr(factory, "__name__", None) or repr(factory)


class FixtureScope:
    """Context manager acquiring one fixture instance for one test case."""

    def __init__(self, factory: Optional[FixtureFactory]) -> None:
        self._factory = factory
        self._instance: Any = None
        self._acquired = False
        self._released = False

    @property
    def acquired(self) -> bool:
        return self._acquired

    @property
    def released(self) -> bool:
        return self._released

    @property
    def instance(self) -> Any:
        return self._instance

    def __enter__(self) -> Any:
        if self._acquired:
            raise RuntimeError("FixtureScope cannot be entered twice")
        if self._factory is None:
            self._acquired = True
            return None
        name = describe_factory(self._factory)
        try:
            instance = self._factory()
            setup = getattr(instance, "setup", None)
            if callable(setup):
                setup()
        except Exception as exc:
            logger.debug("fixture %s failed during setup: %s", name, exc)
            raise SetupFailure(f"{type(exc).__name__}: {exc}") from exc
        logger.debug("fixture %s acquired", name)
        self._instance = instance
        self._acquired = True
        return instance

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if not self._acquired or self._released:
            return None
        self._released = True
        instance, self._instance = self._instance, None
        if instance is None:
            return None
        teardown = getattr(instance, "teardown", None)
        if not callable(teardown):
            return None
        try:
            teardown()
        except Exception as teardown_exc:
            logger.warning("fixture %s failed during teardown: %s", describe_factory(self._factory), teardown_exc)
            raise TeardownFailure(f"{type(teardown_exc).__name__}: {teardown_exc}", body_error=exc) from teardown_exc
        logger.debug("fixture %s released", describe_factory(self._factory))
        return None
