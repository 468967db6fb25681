"""HTTP client for outbound API calls."""

from .client import HttpClient

__all__ = ["HttpClient"]
