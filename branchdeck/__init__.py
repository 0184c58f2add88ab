"""Validated, persistent, reactive stores for a git branch manager."""

__version__ = "0.1.0"
