"""Command line interface."""

from prompt_converters.cli.main import cli, main

__all__ = ["cli", "main"]
