"""
Token-bucket rate limiter shared by every fetch task of one run.
"""

import asyncio
import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Token bucket refilled at ``rate_per_sec`` up to ``burst`` tokens.

    ``acquire()`` suspends the caller until a token is available. Callers
    queue on an ``asyncio.Lock`` and are therefore admitted in arrival order.
    When a cancellation event fires while a caller waits, the caller is let
    through anyway and a warning is logged; cancellation never turns into an
    error here.
    """

    def __init__(self, rate_per_sec: float, burst: int = 1):
        if rate_per_sec <= 0:
            raise ValueError("rate_per_sec must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate_per_sec = rate_per_sec
        self.burst = burst
        self._tokens = float(burst)
        self._last_refill = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self._last_refill
        self._tokens = min(self.burst, self._tokens + elapsed * self.rate_per_sec)
        self._last_refill = now

    async def acquire(self, cancel_event: Optional[asyncio.Event] = None) -> None:
        async with self._lock:
            self._refill()
            if self._tokens < 1:
                delay = (1 - self._tokens) / self.rate_per_sec
                if cancel_event is None:
                    await asyncio.sleep(delay)
                else:
                    try:
                        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
                        logger.warning("Rate limiter wait cancelled, proceeding without a token")
                    except asyncio.TimeoutError:
                        pass
                self._refill()
            # May go negative after a cancelled wait; the debt delays the next caller
            self._tokens -= 1
