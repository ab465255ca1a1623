"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hfsync.models.config import SyncSettings
from hfsync.models.stats import SyncStats
from hfsync.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Check the [user], [server] and [files] sections of your config file.",
            "• 'download_folder' under [files] is required.",
            "• Run `hfsync show-config` to see what was loaded.",
        ],
        "CredentialError": [
            "• The host name or network interfaces could not be read.",
            "• Make sure the process may query network interfaces.",
        ],
        "ManifestError": [
            "• The file index could not be downloaded or parsed.",
            "• Check the server URL and port in your config file.",
            "• Verify that your account name and machine key are registered (`hfsync key`).",
            "• A 401 from the server usually means this machine's key is not registered.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if isinstance(value, list):
            value = ", ".join(value)
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            Text(content.strip()),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_session_header(settings: SyncSettings):
    """Shows where files go and what is never touched."""
    console = Console()
    console.print(f"Destination Folder:\n    {settings.destination_root}")
    console.print("Ignore list:")
    for prefix in settings.ignore_list:
        console.print(f"    {prefix}", markup=False)
    console.print(
        f"[dim]{settings.worker_count} workers at "
        f"{format_size(settings.rate_per_worker)}/s each[/dim]"
    )


def print_summary_panel(stats: SyncStats):
    """Displays the final summary of a single-pass sync."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=16)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Planned:", str(stats.files_planned))
    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.files_downloaded}[/bold green]"
    )
    if stats.files_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.files_failed}[/bold red]")
    stats_table.add_row("Transferred:", format_size(stats.bytes_downloaded))
    stats_table.add_row("Duration:", format_duration(stats.elapsed))
    stats_table.add_row("Avg Speed:", f"{format_size(int(stats.average_speed_bps))}/s")

    console.print(
        Panel(
            stats_table,
            title="[bold]Sync Summary[/bold]",
            border_style="green" if stats.files_failed == 0 else "yellow",
            expand=False,
        )
    )
