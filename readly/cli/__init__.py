"""Command-line interface for readly."""

from .main import main

__all__ = ["main"]
