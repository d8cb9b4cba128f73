"""Shared pacing for outbound calls to rate-sensitive upstream services.

The public geocoder rejects callers that hit it too quickly, so every lookup
in the process goes through one :class:`IntervalRateLimiter`.  Used as an
async context manager it:

1. Serializes callers, so lookups from concurrent requests queue rather than
   race each other.
2. Waits until ``interval`` seconds have passed since the previous call
   *finished* before letting the next one start.

Waiting is done with ``asyncio.sleep`` so only the waiting request is
suspended; the event loop keeps serving everything else.
"""

from __future__ import annotations

import asyncio
import time
from types import TracebackType

from src.utils.logging import get_logger

_logger = get_logger(__name__)


class IntervalRateLimiter:
    """Enforce a minimum gap between consecutive guarded calls.

    Parameters
    ----------
    interval:
        Seconds that must elapse between the end of one call and the start
        of the next.  ``0`` disables pacing but still serializes callers.
    name:
        Label used in log events.
    """

    def __init__(self, interval: float, name: str = "default") -> None:
        if interval < 0:
            raise ValueError("interval must be non-negative")
        self._interval = interval
        self._name = name
        self._lock = asyncio.Lock()
        self._last_release: float | None = None

    @property
    def interval(self) -> float:
        return self._interval

    async def __aenter__(self) -> IntervalRateLimiter:
        await self._lock.acquire()
        if self._last_release is not None:
            wait = self._interval - (time.monotonic() - self._last_release)
            if wait > 0:
                _logger.debug("rate_limiter_wait", limiter=self._name, wait_s=round(wait, 3))
                try:
                    await asyncio.sleep(wait)
                except BaseException:
                    # Cancelled while waiting; __aexit__ will not run.
                    self._lock.release()
                    raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._last_release = time.monotonic()
        self._lock.release()
