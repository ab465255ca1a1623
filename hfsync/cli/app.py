"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from hfsync import __version__
from hfsync.api.auth import derive_credential
from hfsync.api.client import FileServerClient
from hfsync.core.sync_loop import SyncLoop
from hfsync.exceptions import HfsyncError
from hfsync.models.config import SyncSettings
from hfsync.models.stats import SyncStats
from hfsync.storage.config_manager import DEFAULT_CONFIG_FILE, ConfigManager

from .formatters import (
    format_error_with_suggestions,
    print_config,
    print_session_header,
    print_summary_panel,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("hfsync")

app = typer.Typer(
    name="hfsync",
    help="Keep a local folder in sync with an hfsync file server.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

CONFIG_OPTION = typer.Option(
    Path(DEFAULT_CONFIG_FILE),
    "--config",
    "-c",
    help="Path to the INI configuration file.",
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """hfsync file synchronization client"""
    if version:
        console.print(f"[bold]hfsync[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("hfsync").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def key():
    """Print this machine's download key and exit."""
    try:
        console.print(derive_credential(), markup=False, highlight=False)
    except HfsyncError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


@app.command(name="show-config")
def show_config(config: Path = CONFIG_OPTION):
    """Display the configuration as hfsync resolves it."""
    try:
        settings = ConfigManager(config).load_config()
    except HfsyncError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    data = settings.model_dump()
    data["rate_per_worker"] = settings.rate_per_worker
    print_config(config, data)


async def _run_sync(settings: SyncSettings, credential: str) -> SyncStats:
    async with FileServerClient(settings, credential) as client:
        loop = SyncLoop.from_settings(settings, client)
        return await loop.run()


@app.command(name="sync")
def sync_command(
    config: Path = CONFIG_OPTION,
    once: bool = typer.Option(
        False, "--once", help="Run a single cycle even if check_time is set."
    ),
    workers: int | None = typer.Option(
        None,
        "-w",
        "--workers",
        help="Number of simultaneous downloads (overrides the config file).",
    ),
):
    """Synchronize the download folder with the server."""
    cli_options = {
        name: value
        for name, value in {
            "worker_count": workers,
            "check_time": 0 if once else None,
        }.items()
        if value is not None
    }

    try:
        settings = ConfigManager(config).load_config(cli_options)
        print_session_header(settings)
        credential = derive_credential()
        stats = asyncio.run(_run_sync(settings, credential))
    except HfsyncError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_summary_panel(stats)
