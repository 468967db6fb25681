"""Tag commands."""

from typing import Tuple

import click
from rich.console import Console

from ...usecase import UpdateReportInput, UpdateReportUseCase
from ..context import get_repository
from ..error_handlers import handle_cli_errors

console = Console()


def _print_tags(report_id: str, tags) -> None:
    shown = ", ".join(tags) if tags else "(none)"
    console.print(
        f"[green]✓[/green] Tags on {report_id}: [magenta]{shown}[/magenta]", highlight=False
    )


@click.group()
def tag() -> None:
    """Add or remove report tags."""


@tag.command(name="add")
@click.argument("report_id")
@click.argument("tags", nargs=-1, required=True)
@click.pass_context
@handle_cli_errors
def add_tags(ctx: click.Context, report_id: str, tags: Tuple[str, ...]) -> None:
    """Attach TAGS to a report."""
    request = UpdateReportInput(report_id=report_id, add_tags=list(tags))
    output = UpdateReportUseCase(get_repository(ctx)).execute(request)
    _print_tags(output.id, output.tags)


@tag.command(name="remove")
@click.argument("report_id")
@click.argument("tags", nargs=-1, required=True)
@click.pass_context
@handle_cli_errors
def remove_tags(ctx: click.Context, report_id: str, tags: Tuple[str, ...]) -> None:
    """Detach TAGS from a report. Tags that are not attached are ignored."""
    request = UpdateReportInput(report_id=report_id, remove_tags=list(tags))
    output = UpdateReportUseCase(get_repository(ctx)).execute(request)
    _print_tags(output.id, output.tags)
