"""Token bucket rate limiter shared by concurrent batch tasks."""

import asyncio
import logging
import time

from prompt_refinery.config import RateLimitConfig

logger = logging.getLogger(__name__)


class TokenBucket:
    """
    Asyncio token bucket with reservations.

    ``acquire`` reserves a token immediately (the balance may go negative)
    and then sleeps until the reservation matures, so no waiter holds a lock
    while sleeping and waiters are served in arrival order. A waiter that is
    cancelled gives its reservation back.
    """

    def __init__(self, rate: float, burst: int = 1):
        """
        Initialize the bucket full.

        Args:
            rate: Tokens added per second
            burst: Maximum tokens available at once
        """
        if rate <= 0:
            raise ValueError("rate must be positive")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.rate = rate
        self.burst = burst
        self._tokens = float(burst)
        self._updated = time.monotonic()

    @classmethod
    def from_config(cls, config: RateLimitConfig) -> "TokenBucket":
        """Build a bucket from rate limit settings."""
        return cls(rate=config.rate, burst=config.burst)

    def _refill(self, now: float) -> None:
        elapsed = now - self._updated
        if elapsed > 0:
            self._tokens = min(float(self.burst), self._tokens + elapsed * self.rate)
            self._updated = now

    def _reserve(self) -> float:
        """Take one token and return how long to wait before using it."""
        self._refill(time.monotonic())
        self._tokens -= 1.0
        if self._tokens >= 0:
            return 0.0
        return -self._tokens / self.rate

    def _cancel_reservation(self) -> None:
        self._refill(time.monotonic())
        self._tokens = min(float(self.burst), self._tokens + 1.0)

    async def acquire(self) -> None:
        """Wait until a token is available and consume it."""
        delay = self._reserve()
        if delay <= 0:
            return
        logger.debug(f"Rate limited: waiting {delay:.2f}s for a token")
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self._cancel_reservation()
            raise

    @property
    def available(self) -> float:
        """Tokens currently available (negative when reservations are pending)."""
        self._refill(time.monotonic())
        return self._tokens
