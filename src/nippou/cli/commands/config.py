"""Configuration management command."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...core.config import ConfigManager, NippouConfig
from ..context import get_config_manager
from ..error_handlers import handle_cli_errors

console = Console()

SECRET_FIELDS = ("access_token", "client_secret", "password")


def _mask(value: Optional[str]) -> str:
    if not value:
        return "[dim]not set[/dim]"
    return "[dim]********[/dim]"


def _show_value(value) -> str:
    return "[dim]not set[/dim]" if value in (None, "") else str(value)


@click.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option(
    "--export",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Export configuration to file",
)
@click.option(
    "--import",
    "import_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Import configuration from file",
)
@click.option("--reset", is_flag=True, help="Reset configuration to defaults")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
@handle_cli_errors
def config(
    ctx: click.Context,
    show: bool,
    export: Optional[Path],
    import_file: Optional[Path],
    reset: bool,
    yes: bool,
) -> None:
    """Manage configuration.

    \b
    Examples:
        nippou config --show
        nippou config --export nippou.toml
        nippou config --import nippou.toml
        nippou config --reset --yes
    """
    config_manager = get_config_manager(ctx)

    if reset:
        if yes or click.confirm("Are you sure you want to reset all configuration?"):
            config_manager.reset_config()
            console.print("[green]✓ Configuration reset to defaults[/green]")
        return

    if import_file:
        config_manager.import_config(import_file)
        console.print(f"[green]✓ Configuration imported from {import_file}[/green]")
        return

    if export:
        config_manager.export_config(export)
        console.print(f"[green]✓ Configuration exported to {export}[/green]")
        return

    show_configuration(config_manager)


def show_configuration(config_manager: ConfigManager) -> None:
    """Display the effective configuration with secrets masked."""
    config: NippouConfig = config_manager.load_config()
    general = config.general
    salesforce = config.salesforce

    table = Table(title="nippou Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Config File", str(config_manager.config_file))
    table.add_row("Storage Backend", general.storage.backend.value)
    table.add_row("Data Directory", str(general.storage.data_directory))
    table.add_row("Log Level", general.logging.level.value)
    table.add_row("Log Format", general.logging.format)
    table.add_row("Log Output", ", ".join(general.logging.output))
    console.print(table)

    sf_table = Table(title="Salesforce")
    sf_table.add_column("Setting", style="cyan")
    sf_table.add_column("Value", style="green")

    for name in (
        "instance_url",
        "api_version",
        "login_url",
        "object_name",
        "external_id_field",
        "timeout",
        "max_retries",
        "retry_base_delay",
        "retry_jitter",
        "client_id",
        "username",
    ):
        sf_table.add_row(name, _show_value(getattr(salesforce, name)))
    for name in SECRET_FIELDS:
        sf_table.add_row(name, _mask(getattr(salesforce, name)))
    console.print(sf_table)

    if general.storage.backend.value == "salesforce":
        missing = salesforce.missing_credentials()
        if missing:
            console.print(f"[yellow]⚠ Missing Salesforce settings: {', '.join(missing)}[/yellow]")
        else:
            console.print("[green]✓ Salesforce credentials configured[/green]")
