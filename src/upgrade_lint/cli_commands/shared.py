"""Shared utilities for CLI commands."""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from upgrade_lint.config import Settings, load_settings
from upgrade_lint.exceptions import UpgradeLintError
from upgrade_lint.utils.logging import configure_logging, get_logger

# Reports go to stdout, everything else to stderr
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

_settings: Settings | None = None
_logger: Any | None = None


def get_settings_and_logger(
    config_path: Path | None = None,
    log_level: str | None = None,
    log_file: Path | None = None,
    verbose: bool = False,
) -> tuple[Settings, Any]:
    """Load settings and configure logging once per process.

    Args:
        config_path: Optional path to a YAML config file
        log_level: Overrides the configured log level
        log_file: Overrides the configured log file
        verbose: Show all log events on the terminal

    Returns:
        Tuple of (Settings, Logger)

    Raises:
        ConfigurationError: If the config file is unreadable or invalid
    """
    global _settings, _logger

    if _settings is None:
        settings = load_settings(config_path)
        configure_logging(
            log_level or settings.log_level,
            log_file=log_file or settings.log_file,
            verbose=verbose,
        )
        _settings = settings
        _logger = get_logger("cli")

    return _settings, _logger


def reset_cli_state() -> None:
    """Forget cached settings and logger (for tests)."""
    global _settings, _logger
    _settings = None
    _logger = None


def print_error(error: UpgradeLintError) -> None:
    """Print an engine error and its suggestion to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    if error.suggestion:
        err_console.print(f"[dim]Suggestion: {escape(error.suggestion)}[/dim]")
