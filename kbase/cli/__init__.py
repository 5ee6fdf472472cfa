"""Command-line interface for searching knowledge-base records."""

from .main import cli, main

__all__ = ["cli", "main"]
