#!/usr/bin/env python3
"""nippou CLI main entry point."""

from pathlib import Path
from typing import Optional

import click

from ..core.config import LogLevel
from ..exceptions import ConfigurationError
from ..logging_integration import (
    configure_logging_from_config,
    ensure_logging_configured,
    get_logger,
)
from . import __version__
from .commands import config, create, delete, edit, list_reports, show, tag
from .context import get_config


def setup_logging(ctx: click.Context, verbose: int = 0) -> None:
    """Configure logging from the config file; ``-v`` raises the level."""
    try:
        config = get_config(ctx)
    except ConfigurationError:
        # Reported by the command that needs the configuration
        ensure_logging_configured()
        return

    if verbose:
        level = LogLevel.DEBUG if verbose > 1 else LogLevel.INFO
        config = config.model_copy(deep=True)
        config.general.logging.level = level
    configure_logging_from_config(config, service_name="nippou-cli", version=__version__)

    get_logger("nippou.cli").debug("nippou CLI started", version=__version__, verbose_level=verbose)


@click.group()
@click.version_option(version=__version__, prog_name="nippou")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file path",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (-v for INFO, -vv for DEBUG)")
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], verbose: int) -> None:
    """nippou: write, tag and search daily reports.

    Reports are stored in Salesforce, as JSON files or in memory, depending
    on ``general.storage.backend`` in the configuration file.

    \b
    Examples:
        nippou create -m "Visited the Osaka office" -t sales
        nippou list -d 2026-01-08
        nippou tag add <id> follow-up
        nippou config --show
    """
    obj = ctx.ensure_object(dict)
    obj["config_file"] = config_file
    obj["verbose"] = verbose
    setup_logging(ctx, verbose)


cli.add_command(create)
cli.add_command(list_reports)
cli.add_command(show)
cli.add_command(edit)
cli.add_command(delete)
cli.add_command(tag)
cli.add_command(config)


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
