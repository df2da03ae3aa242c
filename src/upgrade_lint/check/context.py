"""Run-wide deadline shared by the executor, the checks and the cluster client."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..exceptions import RunTimeoutError


@dataclass(frozen=True)
class RunContext:
    """Immutable handle on the single deadline of a lint run.

    There is no per-check timeout; every check and every cluster request is
    bounded by the same deadline.

    Attributes:
        deadline: Absolute deadline on ``clock``, or None for no limit
        timeout: Configured timeout in seconds, kept for error messages
        clock: Monotonic time source
    """

    deadline: float | None = None
    timeout: float | None = None
    clock: Callable[[], float] = field(default=time.monotonic, compare=False)

    @classmethod
    def with_timeout(
        cls, seconds: float, clock: Callable[[], float] = time.monotonic
    ) -> RunContext:
        """Start a context whose deadline is ``seconds`` from now."""
        return cls(deadline=clock() + seconds, timeout=seconds, clock=clock)

    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), None if unbounded."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - self.clock())

    def expired(self) -> bool:
        return self.deadline is not None and self.clock() >= self.deadline

    def raise_if_done(self) -> None:
        """Raise RunTimeoutError once the deadline has passed.

        Checks should call this before long-running work.
        """
        if self.expired():
            raise RunTimeoutError(timeout=self.timeout)
