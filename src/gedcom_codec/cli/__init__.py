"""
CLI package for gedcom_codec.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom_codec.cli.app import app, main

__all__ = [
    "app",
    "main",
]
