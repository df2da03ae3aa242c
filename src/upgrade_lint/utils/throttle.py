"""Client-side request throttling (QPS with burst)."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..exceptions import RunTimeoutError
from .logging import get_logger

if TYPE_CHECKING:
    from ..check.context import RunContext

logger = get_logger(__name__)


class TokenBucket:
    """Rate limiter using the token bucket algorithm.

    Tokens refill at ``qps`` per second up to ``burst``. Each request takes one
    token and waits for a refill when the bucket is empty.
    """

    def __init__(
        self,
        qps: float,
        burst: int,
        time_func: Callable[[], float] = time.monotonic,
        sleep_func: Callable[[float], None] = time.sleep,
    ):
        """Initialize the bucket, full.

        Args:
            qps: Sustained requests per second (> 0)
            burst: Bucket capacity (>= 1)
            time_func: Monotonic time source
            sleep_func: Sleep function, replaceable in tests
        """
        if qps <= 0:
            raise ValueError("qps must be greater than zero")
        if burst < 1:
            raise ValueError("burst must be at least 1")
        self.qps = qps
        self.burst = burst
        self._tokens = float(burst)
        self._time = time_func
        self._sleep = sleep_func
        self._last = time_func()
        self._lock = threading.Lock()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(float(self.burst), self._tokens + elapsed * self.qps)
        self._last = now

    def acquire(self, ctx: RunContext | None = None) -> float:
        """Take a token, sleeping until one is available.

        Args:
            ctx: Run context; waiting past its deadline raises instead

        Returns:
            Seconds spent waiting

        Raises:
            RunTimeoutError: If the wait would cross the run deadline
        """
        with self._lock:
            self._refill(self._time())
            self._tokens -= 1.0
            wait = 0.0 if self._tokens >= 0 else -self._tokens / self.qps

        if wait <= 0:
            return 0.0

        if ctx is not None:
            remaining = ctx.remaining()
            if remaining is not None and wait > remaining:
                raise RunTimeoutError(timeout=ctx.timeout)

        logger.debug("throttle_wait", wait_seconds=round(wait, 3))
        self._sleep(wait)
        return wait
