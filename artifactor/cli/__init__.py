"""Command line interface for artifactor"""

from .main import cli, main

__all__ = ["cli", "main"]
