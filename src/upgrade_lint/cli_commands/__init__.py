"""CLI command modules for upgrade-lint.

- shared.py: Settings/logger loading, consoles, error printing
- lint_commands.py / lint_handler.py: The lint command
- core_commands.py: version and list-checks
"""

from .lint_handler import build_options, run_lint
from .shared import console, err_console, get_settings_and_logger

__all__ = [
    "build_options",
    "console",
    "err_console",
    "get_settings_and_logger",
    "run_lint",
]
