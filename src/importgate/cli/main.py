"""CLI commands for importgate."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

import typer
from rich.logging import RichHandler

from importgate.config import GatewayConfig
from importgate.core.exceptions import ImportGateError
from importgate.core.locations import STANDARD_STREAM
from importgate.core.ports import NullProgressReporter, ProgressReporter
from importgate.core.services import FileGateway
from importgate.core.streams import discard_output
from importgate.gateway import create_gateway
from importgate.progress import RichProgressReporter


app = typer.Typer(
    name="importgate",
    help="Open, copy and inspect files through the import gateway.",
    no_args_is_help=True,
)

# Chunk size for copying streams (64KB)
_CHUNK_SIZE = 64 * 1024


@dataclass
class CliState:
    """Options shared by all commands."""

    config_file: Path | None = None


def _fail(error: ImportGateError) -> NoReturn:
    """Print a domain error with its hint and exit with status 1."""
    typer.echo(f"Error: {error}", err=True)
    if error.recovery_hint:
        typer.echo(f"Hint: {error.recovery_hint}", err=True)
    raise typer.Exit(1) from None


def load_config(config_file: Path | None) -> GatewayConfig:
    """Build configuration from the environment, overlaid by config_file.

    Raises:
        typer.Exit: If the configuration file cannot be loaded.
    """
    config = GatewayConfig.from_env()
    if config_file is not None:
        try:
            file_config = GatewayConfig.from_file(config_file)
        except ImportGateError as e:
            _fail(e)
        config.update(file_config.as_dict())
    return config


def get_gateway(ctx: typer.Context) -> FileGateway:
    """Create a gateway from the options of the current invocation."""
    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    return create_gateway(load_config(state.config_file))


@app.callback()
def main_callback(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Properties file (key=value) overriding IMPORTGATE_* variables.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log routing and containment decisions.",
    ),
) -> None:
    """Open, copy and inspect files through the import gateway."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(show_path=False)],
        )
    ctx.obj = CliState(config_file=config)


@app.command()
def resolve(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="Path or URL to resolve."),
) -> None:
    """Print the location after import-directory containment."""
    gateway = get_gateway(ctx)
    try:
        typer.echo(gateway.resolve(location))
    except ImportGateError as e:
        _fail(e)


@app.command()
def cat(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="Path or URL to print."),
) -> None:
    """Write the content of a location to stdout."""
    gateway = get_gateway(ctx)
    out = sys.stdout.buffer
    try:
        with gateway.open_input_stream(location) as stream:
            shutil.copyfileobj(stream, out, _CHUNK_SIZE)
    except ImportGateError as e:
        _fail(e)
    out.flush()


@app.command()
def copy(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Path or URL to read, or '-' for stdin."),
    dest: str = typer.Argument(..., help="Path or URL to write, or '-' for stdout."),
    progress: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show a progress bar while copying.",
    ),
) -> None:
    """Copy a location to another location."""
    gateway = get_gateway(ctx)
    try:
        if progress:
            with RichProgressReporter() as reporter:
                copied = copy_location(gateway, source, dest, reporter)
        else:
            copied = copy_location(gateway, source, dest, NullProgressReporter())
    except ImportGateError as e:
        _fail(e)

    if dest != STANDARD_STREAM:
        typer.echo(f"Copied {_format_size(copied)} to {dest}", err=True)


def copy_location(
    gateway: FileGateway,
    source: str,
    dest: str,
    reporter: ProgressReporter,
) -> int:
    """Copy source to dest through the gateway, reporting progress.

    If the copy fails, the partial output is discarded where the
    destination supports it.

    Returns:
        Number of bytes copied.
    """
    stdout = sys.stdout.buffer
    with gateway.open_input_stream(source) as stream:
        total = stream.total or 0
        callback = reporter.start_task(source, total)
        out = gateway.open_output_stream(dest, fallback=stdout)
        try:
            for chunk in iter(lambda: stream.read(_CHUNK_SIZE), b""):
                out.write(chunk)
                callback(stream.count, total)
        except BaseException:
            if out is not stdout:
                discard_output(out)
            raise
        if out is stdout:
            out.flush()
        else:
            out.close()
        reporter.finish_task(source)
        return stream.count


def _format_size(size_bytes: int) -> str:
    """Format size in bytes to human-readable format."""
    size = float(size_bytes)
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0
    return f"{size:.1f} TB"


def main() -> None:
    """Entry point for the CLI."""
    app()
