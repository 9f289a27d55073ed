"""Test the token bucket shared by batch tasks."""

import asyncio
import time

import pytest

from prompt_refinery.config import RateLimitConfig
from prompt_refinery.optimizer import TokenBucket


@pytest.mark.asyncio
async def test_burst_is_available_immediately():
    bucket = TokenBucket(rate=1.0, burst=3)

    start = time.monotonic()
    for _ in range(3):
        await bucket.acquire()

    assert time.monotonic() - start < 0.5
    assert bucket.available < 1


@pytest.mark.asyncio
async def test_acquire_waits_once_burst_is_spent():
    bucket = TokenBucket(rate=20.0, burst=1)
    await bucket.acquire()

    start = time.monotonic()
    await bucket.acquire()

    # One token every 50ms
    assert time.monotonic() - start >= 0.03


@pytest.mark.asyncio
async def test_concurrent_waiters_are_spaced_out():
    bucket = TokenBucket(rate=50.0, burst=1)
    start = time.monotonic()

    await asyncio.gather(*[bucket.acquire() for _ in range(4)])

    # First is free, the remaining three wait 20ms each in turn
    assert time.monotonic() - start >= 0.05


@pytest.mark.asyncio
async def test_cancelled_waiter_returns_its_token():
    bucket = TokenBucket(rate=1.0, burst=1)
    await bucket.acquire()

    waiter = asyncio.create_task(bucket.acquire())
    await asyncio.sleep(0.01)
    assert bucket.available < 0

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert bucket.available > -0.5


def test_from_config_uses_events_per_interval():
    bucket = TokenBucket.from_config(RateLimitConfig(events=2, interval=4.0, burst=5))
    assert bucket.rate == pytest.approx(0.5)
    assert bucket.burst == 5


@pytest.mark.parametrize(("rate", "burst"), [(0, 1), (-1.0, 1), (1.0, 0)])
def test_invalid_settings_are_rejected(rate, burst):
    with pytest.raises(ValueError):
        TokenBucket(rate=rate, burst=burst)
