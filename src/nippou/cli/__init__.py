"""Command-line interface for nippou."""

from nippou import __version__

__all__ = ["__version__"]
