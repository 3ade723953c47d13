"""
Paces Slack Web API calls and backs off when Slack answers with HTTP 429.
"""

import asyncio
import logging
import time

log = logging.getLogger(__name__)


class AdaptiveRateLimiter:
    """
    Enforces a minimum interval between calls.

    Slack's Tier 2/3 methods allow roughly 20-50 requests per minute, so the
    default pace is conservative. A 429 halves the rate for the rest of the run.
    """

    def __init__(self, calls_per_second: float = 1.0, min_calls_per_second: float = 0.1):
        self._rate = calls_per_second
        self._min_rate = min_calls_per_second
        self._last_call_time = 0.0
        self._lock = asyncio.Lock()

    @property
    def rate(self) -> float:
        return self._rate

    async def on_429(self, retry_after: float | None = None) -> None:
        """
        Called when Slack rate-limits a call. Slows every following call down.
        """
        async with self._lock:
            self._rate = max(self._min_rate, self._rate * 0.5)
            if retry_after:
                self._rate = min(self._rate, 1.0 / retry_after)
            log.warning(
                f"[yellow]Slack rate limit hit. New pace: {self._rate:.2f} calls/s[/yellow]"
            )

    async def acquire(self) -> None:
        """
        Waits if necessary to respect the current pace before a call proceeds.
        """
        async with self._lock:
            min_interval = 1.0 / self._rate
            elapsed = time.monotonic() - self._last_call_time
            if elapsed < min_interval:
                await asyncio.sleep(min_interval - elapsed)
            self._last_call_time = time.monotonic()
