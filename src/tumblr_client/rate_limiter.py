"""Opt-in request throttling.

The client itself never throttles. Callers that need to stay under a
platform limit (for example 60 block operations per minute) can hand a
``RateLimiter`` to ``AiohttpTransport``; every request then waits for a
token from the bucket before it is sent.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RateLimiter:
    """Token bucket rate limiter for async operations.

    Tokens are added at a constant rate up to ``burst``; each request
    consumes one.

    Attributes:
        rate_per_second: Sustained rate limit (tokens per second)
        burst: Maximum bucket capacity
    """

    def __init__(
        self,
        rate_per_second: float,
        burst: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the bucket, full.

        Args:
            rate_per_second: Sustained rate limit (e.g. 1.0 for 1 req/sec)
            burst: Maximum burst size (default: one second worth of tokens)
            clock: Monotonic time source
        """
        if rate_per_second <= 0:
            raise ValueError("rate_per_second must be positive")

        self.rate_per_second = rate_per_second
        self.burst = max(1, burst if burst is not None else int(rate_per_second))

        self._clock = clock
        self._tokens: float = float(self.burst)
        self._last_update: float = clock()
        self._lock = asyncio.Lock()

        logger.debug(f"RateLimiter initialized: {rate_per_second} req/s, burst={self.burst}")

    @classmethod
    def per_minute(cls, requests: int) -> "RateLimiter":
        """Limiter allowing ``requests`` per minute with no burst above one."""
        return cls(requests / 60.0, burst=1)

    def _refill_tokens(self) -> None:
        now = self._clock()
        elapsed = now - self._last_update
        self._tokens = min(self._tokens + elapsed * self.rate_per_second, float(self.burst))
        self._last_update = now

    async def acquire(self) -> None:
        """Take one token, sleeping until one is available."""
        async with self._lock:
            while True:
                self._refill_tokens()

                if self._tokens >= 1:
                    self._tokens -= 1
                    return

                wait_time = (1 - self._tokens) / self.rate_per_second
                logger.debug(f"Rate limit reached, waiting {wait_time:.2f}s")
                await asyncio.sleep(wait_time)

    def get_available_tokens(self) -> float:
        """Current token count (approximate, non-blocking)."""
        elapsed = self._clock() - self._last_update
        return min(self._tokens + elapsed * self.rate_per_second, float(self.burst))

    async def __aenter__(self):
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False
