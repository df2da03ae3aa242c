"""Upgrade compatibility linter for platform operator installations."""

__version__ = "0.4.0"
