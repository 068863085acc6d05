"""
Command-line interface for Note Parser.

Built with typer and rich.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
