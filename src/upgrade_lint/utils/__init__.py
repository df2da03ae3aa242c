"""Shared helpers: logging, version parsing, request throttling."""
