"""Dependency checks."""
