"""Helpers shared by the built-in checks."""
