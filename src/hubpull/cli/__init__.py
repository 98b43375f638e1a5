"""Command-line interface for hubpull."""

from hubpull.cli.main import app

__all__ = ["app"]
