"""CLI package for homesweep."""

from homesweep.cli.main import app

__all__ = ["app"]
