"""Command-line interface for reelnotes."""

from .core import cli, main

__all__ = ["cli", "main"]
