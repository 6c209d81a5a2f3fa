"""Command-line interface for the Tines SDK."""

from .cli_app import app, create_app, run

__all__ = ["app", "create_app", "run"]
