"""CLI interface module."""

from .manage import cli

__all__ = ["cli"]
