"""CLI interface using Typer."""

from launch_search.cli.app import app, main

__all__ = ["app", "main"]
