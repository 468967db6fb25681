"""CLI commands for nippou."""

from .config import config
from .report import create, delete, edit, list_reports, show
from .tag import tag

__all__ = [
    "create",
    "list_reports",
    "show",
    "edit",
    "delete",
    "tag",
    "config",
]
