"""
Rich rendering of report outputs.
"""

import json
from typing import Iterable, List

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..usecase import ReportOutput

console = Console()

PREVIEW_LENGTH = 60


def _preview(content: str) -> str:
    first_line = content.splitlines()[0] if content else ""
    if len(first_line) > PREVIEW_LENGTH:
        return first_line[: PREVIEW_LENGTH - 3] + "..."
    if first_line != content:
        return first_line + " ..."
    return first_line


def print_json(outputs) -> None:
    """Print one output or a list of outputs as JSON on stdout."""
    if isinstance(outputs, ReportOutput):
        data = outputs.to_dict()
    else:
        data = [output.to_dict() for output in outputs]
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def print_report_table(outputs: List[ReportOutput], title: str = "Reports") -> None:
    if not outputs:
        console.print("[yellow]No reports found[/yellow]")
        return

    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Date", style="green")
    table.add_column("Content")
    table.add_column("Tags", style="magenta")

    for output in outputs:
        table.add_row(output.id, output.date, _preview(output.content), ", ".join(output.tags))

    console.print(table)


def _detail_lines(output: ReportOutput) -> Iterable[str]:
    yield f"[bold]Date:[/bold] {output.date}"
    if output.tags:
        yield f"[bold]Tags:[/bold] {', '.join(output.tags)}"
    if output.location is not None:
        place = f" ({output.location.address})" if output.location.address else ""
        yield (
            f"[bold]Location:[/bold] {output.location.latitude:.6f}, "
            f"{output.location.longitude:.6f}{place}"
        )
    if output.voice is not None:
        state = "enabled" if output.voice.enabled else "disabled"
        model = f" ({output.voice.model_name})" if output.voice.model_name else ""
        yield f"[bold]Voice:[/bold] {state}{model}"
    yield f"[bold]Created:[/bold] {output.created_at}"
    yield f"[bold]Updated:[/bold] {output.updated_at}"


def print_report_panel(output: ReportOutput, style: str = "blue") -> None:
    body = "\n".join(_detail_lines(output))
    console.print(Panel(body, title=f"Report {output.id}", border_style=style))
    console.print(output.content, markup=False, highlight=False)
