"""Diagnostic message side-channel for test bodies."""
from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

_CURRENT_LOG: contextvars.ContextVar[Optional["MessageLog"]] = contextvars.ContextVar(
    "suitekit_message_log", default=None
)


class MessageLog:
    """Ordered messages emitted while one test body runs."""

    def __init__(self) -> None:
        self._messages: List[str] = []
        self._failures: List[str] = []

    def append(self, text: str) -> None:
        self._messages.append(text)

    def record_failure(self, reason: str) -> None:
        self._failures.append(reason)

    def failures(self) -> Tuple[str, ...]:
        return tuple(self._failures)

    def messages(self) -> Tuple[str, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    @contextlib.contextmanager
    def capture(self) -> Iterator["MessageLog"]:
        token = _CURRENT_LOG.set(self)
        try:
            yield self
        finally:
            _CURRENT_LOG.reset(token)


def message(text: object) -> None:
    """Attach a diagnostic message to the running test case."""

    rendered = str(text)
    log = _CURRENT_LOG.get()
    if log is None:
        logger.debug("message outside of a running test: %s", rendered)
        return
    logger.debug("message: %s", rendered)
    log.append(rendered)


def current_log() -> Optional[MessageLog]:
    return _CURRENT_LOG.get()
