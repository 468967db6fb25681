"""Report commands: create, list, show, edit and delete."""

from datetime import date
from typing import Optional, Tuple

import click
from rich.console import Console

from ...logging import get_logger
from ...usecase import (
    CreateReportInput,
    CreateReportUseCase,
    DeleteReportUseCase,
    GetReportUseCase,
    ListReportsInput,
    ListReportsUseCase,
    UpdateReportInput,
    UpdateReportUseCase,
)
from ..context import get_repository
from ..display import print_json, print_report_panel, print_report_table
from ..error_handlers import handle_cli_errors
from ._options import build_location, build_voice, json_option, read_content

console = Console()
logger = get_logger(__name__)


def _today() -> str:
    return date.today().isoformat()


@click.command()
@click.option("--date", "-d", "report_date", help="Report date (YYYY-MM-DD), defaults to today")
@click.option("--content", "-m", help="Report text")
@click.option(
    "--file",
    "-f",
    "content_file",
    type=click.File("r", encoding="utf-8"),
    help="Read report text from a file ('-' for stdin)",
)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag to attach (repeatable)")
@click.option("--lat", "latitude", type=float, help="Latitude in degrees")
@click.option("--lon", "longitude", type=float, help="Longitude in degrees")
@click.option("--address", help="Human-readable address for the location")
@click.option("--voice-model", help="Enable voice input with this model")
@json_option
@click.pass_context
@handle_cli_errors
def create(
    ctx: click.Context,
    report_date: Optional[str],
    content: Optional[str],
    content_file,
    tags: Tuple[str, ...],
    latitude: Optional[float],
    longitude: Optional[float],
    address: Optional[str],
    voice_model: Optional[str],
    as_json: bool,
) -> None:
    """Create a daily report.

    \b
    Examples:
        nippou create -m "Visited the Osaka office" -t sales -t osaka
        nippou create -d 2026-01-08 -f notes.txt --lat 34.69 --lon 135.50
    """
    request = CreateReportInput(
        date=report_date or _today(),
        content=read_content(content, content_file) or "",
        location=build_location(latitude, longitude, address),
        voice=build_voice(voice_model),
        tags=list(tags),
    )
    output = CreateReportUseCase(get_repository(ctx)).execute(request)

    if as_json:
        print_json(output)
        return
    console.print(f"[green]✓ Created report {output.id}[/green]")
    print_report_panel(output, style="green")


@click.command(name="list")
@click.option(
    "--date",
    "-d",
    "report_date",
    help="Report date (YYYY-MM-DD), defaults to today unless --tag is given",
)
@click.option("--to", "end_date", help="Last date of a range starting at --date")
@click.option("--tag", "-t", help="Only reports carrying this tag")
@json_option
@click.pass_context
@handle_cli_errors
def list_reports(
    ctx: click.Context,
    report_date: Optional[str],
    end_date: Optional[str],
    tag: Optional[str],
    as_json: bool,
) -> None:
    """List reports by date, date range or tag.

    \b
    Examples:
        nippou list
        nippou list -d 2026-01-01 --to 2026-01-31
        nippou list -t sales
    """
    if report_date is None and tag is None:
        report_date = _today()
    request = ListReportsInput(date=report_date, end_date=end_date, tag=tag)
    outputs = ListReportsUseCase(get_repository(ctx)).execute(request)

    if as_json:
        print_json(outputs)
        return
    print_report_table(outputs)


@click.command()
@click.argument("report_id")
@json_option
@click.pass_context
@handle_cli_errors
def show(ctx: click.Context, report_id: str, as_json: bool) -> None:
    """Show one report."""
    output = GetReportUseCase(get_repository(ctx)).execute(report_id)
    if as_json:
        print_json(output)
        return
    print_report_panel(output)


@click.command()
@click.argument("report_id")
@click.option("--content", "-m", help="Replace the report text")
@click.option(
    "--file",
    "-f",
    "content_file",
    type=click.File("r", encoding="utf-8"),
    help="Replace the report text from a file ('-' for stdin)",
)
@click.option("--lat", "latitude", type=float, help="Latitude in degrees")
@click.option("--lon", "longitude", type=float, help="Longitude in degrees")
@click.option("--address", help="Human-readable address for the location")
@click.option("--clear-location", is_flag=True, help="Remove the location")
@click.option("--voice-model", help="Enable voice input with this model")
@click.option("--voice-off", is_flag=True, help="Disable voice input")
@click.option("--clear-voice", is_flag=True, help="Remove the voice settings")
@json_option
@click.pass_context
@handle_cli_errors
def edit(
    ctx: click.Context,
    report_id: str,
    content: Optional[str],
    content_file,
    latitude: Optional[float],
    longitude: Optional[float],
    address: Optional[str],
    clear_location: bool,
    voice_model: Optional[str],
    voice_off: bool,
    clear_voice: bool,
    as_json: bool,
) -> None:
    """Edit the text, location or voice settings of a report."""
    request = UpdateReportInput(
        report_id=report_id,
        content=read_content(content, content_file),
        location=build_location(latitude, longitude, address),
        remove_location=clear_location,
        voice=build_voice(voice_model, voice_off),
        remove_voice=clear_voice,
    )
    output = UpdateReportUseCase(get_repository(ctx)).execute(request)

    if as_json:
        print_json(output)
        return
    console.print(f"[green]✓ Updated report {output.id}[/green]")
    print_report_panel(output, style="green")


@click.command()
@click.argument("report_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option("--missing-ok", is_flag=True, help="Succeed even if the report does not exist")
@click.pass_context
@handle_cli_errors
def delete(ctx: click.Context, report_id: str, yes: bool, missing_ok: bool) -> None:
    """Delete a report."""
    if not yes:
        click.confirm(f"Delete report {report_id}?", abort=True)
    DeleteReportUseCase(get_repository(ctx)).execute(report_id, must_exist=not missing_ok)
    logger.debug("Report deleted from CLI", report_id=report_id)
    console.print(f"[green]✓ Deleted report {report_id}[/green]")
