"""Workload checks."""
