"""Logging configuration using structlog over the standard library.

Every handler writes to stderr or a file; stdout carries only the lint report,
so ``upgrade-lint lint -o json | jq`` keeps working with logging enabled.

Terminal output is deliberately sparse: without ``--debug`` only ERROR records
reach the console. Fatal run errors are logged at INFO; the CLI prints
them as a single error line. The optional log file receives every DEBUG+ event as JSON.
"""

import logging
import sys
import time
from collections import deque
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, ProcessorFormatter

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 2


@dataclass(frozen=True)
class EventRateLimit:
    """At most ``limit`` console lines for one event per ``per_seconds``."""

    limit: int
    per_seconds: float


# Per-request events; a full run issues hundreds of them.
CHATTY_EVENTS: dict[str, EventRateLimit] = {
    "cluster_request": EventRateLimit(20, 5.0),
    "throttle_wait": EventRateLimit(5, 5.0),
}


class ConsoleRateLimiter:
    """structlog processor dropping chatty events beyond their rate limit.

    Only installed on the console chain; the log file still sees every event.
    """

    def __init__(
        self,
        limits: Mapping[str, EventRateLimit],
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limits = dict(limits)
        self._clock = clock
        self._seen: dict[str, deque[float]] = {}

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> MutableMapping[str, Any]:
        event = event_dict.get("event")
        rate = self.limits.get(event) if isinstance(event, str) else None
        if rate is None:
            return event_dict

        now = self._clock()
        seen = self._seen.setdefault(event, deque())
        while seen and now - seen[0] > rate.per_seconds:
            seen.popleft()
        if len(seen) >= rate.limit:
            raise structlog.DropEvent
        seen.append(now)
        return event_dict


class TerminalEventFilter(logging.Filter):
    """Pass ERROR records only; everything when verbose."""

    def __init__(self, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        return self.verbose or record.levelno >= logging.ERROR


class TerminalRenderer:
    """One short line per event for non-verbose terminals.

    Errors become ``ERROR: <error>``; anything else uses structlog's plain
    console renderer.
    """

    def __init__(self) -> None:
        self._plain = ConsoleRenderer(
            colors=False, exception_formatter=structlog.dev.plain_traceback
        )

    def __call__(
        self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        if str(event_dict.get("level", "")).lower() in ("error", "critical"):
            return f"ERROR: {event_dict.get('error', event_dict.get('event', ''))}"
        return str(self._plain(logger, method_name, event_dict))


_installed: list[logging.Handler] = []
_configured = False


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _console_handler(level: str, verbose: bool, rate_limit: bool) -> logging.Handler:
    pre_chain = _shared_processors()
    if rate_limit:
        pre_chain.append(ConsoleRateLimiter(CHATTY_EVENTS))

    renderer: Any
    if verbose:
        renderer = ConsoleRenderer(
            colors=False, exception_formatter=structlog.dev.plain_traceback
        )
    else:
        renderer = TerminalRenderer()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level(level))
    handler.addFilter(TerminalEventFilter(verbose=verbose))
    handler.setFormatter(
        ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        ProcessorFormatter(
            processor=JSONRenderer(), foreign_pre_chain=_shared_processors()
        )
    )
    return handler


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    verbose: bool = False,
    rate_limit_console: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Safe to call repeatedly; handlers from a previous call are replaced.

    Args:
        log_level: Minimum console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional JSON log file receiving every DEBUG+ event
        verbose: Show every event on the console instead of the terse subset
        rate_limit_console: Throttle per-request events on the console
    """
    global _configured

    structlog.configure(
        processors=[*_shared_processors(), ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    _installed.append(_console_handler(log_level, verbose, rate_limit_console))
    if log_file:
        _installed.append(_file_handler(log_file))
    for handler in _installed:
        root.addHandler(handler)

    _configured = True
    get_logger(__name__).debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_file) if log_file else None,
        verbose=verbose,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
