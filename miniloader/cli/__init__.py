"""Command-line interface for Miniloader."""

from .app import app

__all__ = ["app"]
