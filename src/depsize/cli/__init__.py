"""Command line interface for depsize."""

from .main import main

__all__ = ["main"]
