"""Command-line interface for vectorpen.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Path data decoding and line-to-curve promotion
- Polygon and star vertex generation
- Replay of recorded editing sessions into a document
- Document checking with a report of dropped records
"""

from vectorpen.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
