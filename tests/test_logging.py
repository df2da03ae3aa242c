"""Tests for console log filtering and rendering."""

import logging

import pytest
import structlog

from upgrade_lint.utils.logging import (
    ConsoleRateLimiter,
    EventRateLimit,
    TerminalEventFilter,
    TerminalRenderer,
)


def _record(message, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, message, None, None)


class TestConsoleRateLimiter:
    """Test rate limiting of chatty events."""

    def test_drops_events_over_limit(self, clock) -> None:
        limiter = ConsoleRateLimiter({"cluster_request": EventRateLimit(2, 5.0)}, clock)

        limiter(None, "debug", {"event": "cluster_request"})
        limiter(None, "debug", {"event": "cluster_request"})
        with pytest.raises(structlog.DropEvent):
            limiter(None, "debug", {"event": "cluster_request"})

        clock.advance(6)
        assert limiter(None, "debug", {"event": "cluster_request"})

    def test_other_events_pass(self, clock) -> None:
        limiter = ConsoleRateLimiter({"cluster_request": EventRateLimit(1, 5.0)}, clock)
        for _ in range(5):
            assert limiter(None, "info", {"event": "lint_started"})


class TestTerminalEventFilter:
    """Test which events reach the terminal."""

    def test_internal_events_hidden(self) -> None:
        assert not TerminalEventFilter().filter(_record("check_started"))

    def test_group_failure_hidden(self) -> None:
        assert not TerminalEventFilter().filter(_record("check_group_failed"))

    def test_errors_always_shown(self) -> None:
        assert TerminalEventFilter().filter(_record("anything", logging.ERROR))

    def test_verbose_shows_everything(self) -> None:
        assert TerminalEventFilter(verbose=True).filter(_record("check_started"))


class TestTerminalRenderer:
    """Test short terminal lines."""

    def test_generic_error_uses_error_field(self) -> None:
        line = TerminalRenderer()(
            None, "error", {"event": "lint_failed", "level": "error", "error": "boom"}
        )
        assert line == "ERROR: boom"
