"""Command-line interface for glyphfield.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for glyph rendering
- Verbose/quiet output modes
- Detailed error reporting
"""

from glyphfield.cli.app import cli, main

__all__ = ["cli", "main"]
