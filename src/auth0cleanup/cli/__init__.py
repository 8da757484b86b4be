"""Command line harness for running the cleanup function locally."""

from .main import cli, main

__all__ = ["cli", "main"]
