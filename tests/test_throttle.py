"""Tests for the run context deadline and the request throttle."""

import pytest

from upgrade_lint.check.context import RunContext
from upgrade_lint.exceptions import RunTimeoutError
from upgrade_lint.utils.throttle import TokenBucket


class TestRunContext:
    """Test the run-wide deadline."""

    def test_unbounded_context(self) -> None:
        ctx = RunContext()
        assert ctx.remaining() is None
        assert not ctx.expired()
        ctx.raise_if_done()

    def test_remaining_counts_down(self, clock) -> None:
        ctx = RunContext.with_timeout(10, clock=clock)
        clock.advance(4)
        assert ctx.remaining() == pytest.approx(6)

    def test_expired_raises(self, clock) -> None:
        ctx = RunContext.with_timeout(10, clock=clock)
        clock.advance(10)
        assert ctx.expired()
        assert ctx.remaining() == 0
        with pytest.raises(RunTimeoutError) as exc_info:
            ctx.raise_if_done()
        assert exc_info.value.timeout == 10


class TestTokenBucket:
    """Test QPS and burst limiting."""

    def _bucket(self, clock, qps=2.0, burst=3):
        sleeps: list[float] = []

        def sleep(seconds: float) -> None:
            sleeps.append(seconds)
            clock.advance(seconds)

        return TokenBucket(qps=qps, burst=burst, time_func=clock, sleep_func=sleep), sleeps

    def test_burst_is_free(self, clock) -> None:
        bucket, sleeps = self._bucket(clock)
        for _ in range(3):
            assert bucket.acquire() == 0.0
        assert sleeps == []

    def test_waits_once_burst_is_spent(self, clock) -> None:
        bucket, sleeps = self._bucket(clock)
        for _ in range(3):
            bucket.acquire()

        waited = bucket.acquire()

        assert waited == pytest.approx(0.5)
        assert sleeps == [pytest.approx(0.5)]

    def test_tokens_refill_over_time(self, clock) -> None:
        bucket, sleeps = self._bucket(clock)
        for _ in range(3):
            bucket.acquire()

        clock.advance(0.5)

        assert bucket.acquire() == 0.0
        assert sleeps == []

    def test_wait_past_deadline_raises(self, clock) -> None:
        bucket, sleeps = self._bucket(clock, qps=1.0, burst=1)
        ctx = RunContext.with_timeout(0.5, clock=clock)
        bucket.acquire(ctx)

        with pytest.raises(RunTimeoutError):
            bucket.acquire(ctx)
        assert sleeps == []

    @pytest.mark.parametrize(("qps", "burst"), [(0, 1), (-1, 1), (1, 0)])
    def test_invalid_parameters(self, qps, burst) -> None:
        with pytest.raises(ValueError):
            TokenBucket(qps=qps, burst=burst)
