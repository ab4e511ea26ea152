"""Dirs command for CLI."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from importgate.cli.main import app, get_gateway
from importgate.config import directory_settings
from importgate.core.models import OperationalDirectory


@app.command()
def dirs(
    ctx: typer.Context,
    all_settings: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Also list every configured dbms.directories.* setting.",
    ),
) -> None:
    """Show the log and metrics directories available to tooling."""
    gateway = get_gateway(ctx)

    table = Table()
    table.add_column("Directory")
    table.add_column("Path")

    for kind in OperationalDirectory:
        directory = gateway.operational_directory(kind)
        shown = str(directory) if directory is not None else "[dim]not available[/dim]"
        table.add_row(kind.value, shown)

    if all_settings:
        for key, path in directory_settings(gateway.config).items():
            table.add_row(key, str(path))

    console = Console(force_terminal=True)
    console.print(table)
