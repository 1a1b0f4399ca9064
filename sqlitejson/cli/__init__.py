"""CLI module for sqlitejson."""

from sqlitejson.cli.main import app, main_cli

__all__ = [
    "app",
    "main_cli",
]
