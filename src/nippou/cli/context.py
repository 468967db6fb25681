"""
Shared state for CLI commands.

The click context object is a dict. Commands get the configuration manager
and the repository through the helpers here; tests can pre-populate
``ctx.obj["repository"]`` to run commands against an in-memory store.
"""

from typing import Optional

import click

from ..core.config import ConfigManager, NippouConfig
from ..infrastructure import create_repository
from ..models import ReportRepository


def get_config_manager(ctx: click.Context) -> ConfigManager:
    obj = ctx.ensure_object(dict)
    if "config_manager" not in obj:
        obj["config_manager"] = ConfigManager(obj.get("config_file"))
    return obj["config_manager"]


def get_config(ctx: click.Context) -> NippouConfig:
    return get_config_manager(ctx).load_config()


def get_repository(ctx: click.Context) -> ReportRepository:
    """Repository for the configured backend, created once per invocation."""
    obj = ctx.ensure_object(dict)
    repository: Optional[ReportRepository] = obj.get("repository")
    if repository is None:
        repository = create_repository(get_config(ctx))
        obj["repository"] = repository
    return repository
