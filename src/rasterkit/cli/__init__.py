"""Command-line interface for rasterkit.

This module provides the CLI using Typer with rich output on stderr and
results on stdout.

Key features:
- line, thick and disk commands for single shapes
- clip command for segment files or stdin
- batch command with parallel workers and a progress bar
- Text or JSON output
"""

from rasterkit.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
