"""Lint command orchestration."""

from .command import ClientFactory, LintCommand, LintOutcome
from .options import LintOptions, ValidatedOptions

__all__ = [
    "ClientFactory",
    "LintCommand",
    "LintOptions",
    "LintOutcome",
    "ValidatedOptions",
]
