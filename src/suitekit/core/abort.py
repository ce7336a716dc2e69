"""Abort requests honoured between test cases."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class AbortSignal:
    """Global stop request for a run, optionally driven by a timeout.

    The engine only polls the signal between test cases, so a case that has
    started always finishes its fixture teardown.
    """

    def __init__(self, *, timeout: Optional[float] = None, clock: Callable[[], float] = time.monotonic) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError("timeout must be positive")
        self._timeout = timeout
        self._clock = clock
        self._deadline: Optional[float] = None
        self._reason: Optional[str] = None

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def start(self) -> None:
        if self._timeout is not None:
            self._deadline = self._clock() + self._timeout

    def request(self, reason: str = "abort requested") -> None:
        if self._reason is None:
            logger.warning("abort requested: %s", reason)
            self._reason = reason

    def requested(self) -> bool:
        if self._reason is None and self._deadline is not None and self._clock() >= self._deadline:
            self.request(f"timeout after {self._timeout:g}s")
        return self._reason is not None
