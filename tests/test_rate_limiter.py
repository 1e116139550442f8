"""
Tests for the rate limiter module.
"""

import asyncio

import pytest

from tumblr_client.rate_limiter import RateLimiter


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestRateLimiter:
    """Tests for RateLimiter class."""

    def test_initialization(self):
        """Burst defaults to one second worth of tokens."""
        limiter = RateLimiter(rate_per_second=10.0)

        assert limiter.rate_per_second == 10.0
        assert limiter.burst == 10

    def test_initialization_with_burst(self):
        """Test initialization with custom burst size."""
        limiter = RateLimiter(rate_per_second=5.0, burst=3)

        assert limiter.burst == 3

    def test_slow_rate_keeps_burst_of_one(self):
        """Rates below one per second still allow one request."""
        assert RateLimiter(rate_per_second=0.5).burst == 1

    def test_initialization_invalid_rate(self):
        """Test initialization with invalid rate."""
        with pytest.raises(ValueError):
            RateLimiter(rate_per_second=0)

        with pytest.raises(ValueError):
            RateLimiter(rate_per_second=-1)

    def test_per_minute(self):
        """per_minute converts to a per-second rate with no burst."""
        limiter = RateLimiter.per_minute(60)

        assert limiter.rate_per_second == 1.0
        assert limiter.burst == 1

    @pytest.mark.asyncio
    async def test_acquire_consumes_token(self):
        """Acquiring takes one token from a full bucket."""
        clock = FakeClock()
        limiter = RateLimiter(rate_per_second=5.0, burst=5, clock=clock)

        await limiter.acquire()

        assert limiter.get_available_tokens() == pytest.approx(4.0)

    def test_tokens_refill_over_time(self):
        """Tokens are added at the configured rate up to the burst size."""
        clock = FakeClock()
        limiter = RateLimiter(rate_per_second=2.0, burst=4, clock=clock)
        limiter._tokens = 0.0

        clock.advance(1.0)
        assert limiter.get_available_tokens() == pytest.approx(2.0)

        clock.advance(10.0)
        assert limiter.get_available_tokens() == pytest.approx(4.0)

    @pytest.mark.asyncio
    async def test_acquire_waits_when_empty(self, monkeypatch):
        """An empty bucket sleeps for the time one token takes."""
        clock = FakeClock()
        limiter = RateLimiter(rate_per_second=2.0, burst=1, clock=clock)
        sleeps = []

        async def fake_sleep(seconds):
            sleeps.append(seconds)
            clock.advance(seconds)

        monkeypatch.setattr(asyncio, "sleep", fake_sleep)

        await limiter.acquire()
        await limiter.acquire()

        assert sleeps == [pytest.approx(0.5)]

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """The limiter can guard a block."""
        clock = FakeClock()
        limiter = RateLimiter(rate_per_second=3.0, burst=3, clock=clock)

        async with limiter:
            pass

        assert limiter.get_available_tokens() == pytest.approx(2.0)
