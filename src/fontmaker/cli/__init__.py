"""Command-line interface for fontmaker.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Session state files created, edited and exported from the shell
- Layout preview tables with collision highlighting
- Per-style export summaries
- Detailed error reporting
"""

from fontmaker.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
