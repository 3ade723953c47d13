"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from slack_sweeper.models.config import SweepConfig
from slack_sweeper.models.stats import SweepStats
from slack_sweeper.utils.formatting import format_duration, format_size


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConfigurationError": [
            "• Pass --token or export SLACK_TOKEN.",
            "• --cutoff-days must be zero or more.",
        ],
        "DirectoryFetchError": [
            "• Check that the token is valid and has not been revoked.",
            "• The token needs the users:read and channels:read scopes.",
        ],
        "PageFetchError": [
            "• The token needs the files:read scope.",
            "• Slack may be rate-limiting this workspace. Try again later.",
        ],
        "ClientResponseError": [
            "• A network connection issue occurred.",
            "• The Slack API might be temporarily unavailable.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )
    slack_hints = {
        "invalid_auth": "• Slack rejected the token. Generate a new one.",
        "not_authed": "• No token reached Slack. Check --token or SLACK_TOKEN.",
        "missing_scope": "• The token lacks a scope this call needs.",
        "ratelimited": "• Slack is rate-limiting this workspace. Try again later.",
    }
    if context and (hint := slack_hints.get(context.get("slack_error"))):
        suggestions = [hint, *suggestions]

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_run_header(config: SweepConfig, console: Console):
    mode = (
        "[bold red]download + delete[/bold red]"
        if config.run_delete
        else "[bold cyan]dry run[/bold cyan]"
    )
    console.print(
        f"🧹 Sweeping files older than [bold]{config.cutoff_days:g}[/bold] days "
        f"into [dim]{config.destination}[/dim] ({mode})"
    )


def print_summary_panel(stats: SweepStats, duration_s: float, console: Console):
    """Displays the final summary of the sweep."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white", justify="left")

    table.add_row("Pages fetched:", str(stats.pages_fetched))
    table.add_row("Candidates:", str(stats.candidates_found))
    if stats.dry_run:
        table.add_row("Would download:", f"[cyan]{stats.files_announced}[/cyan]")
    else:
        table.add_row(
            "✓ Downloaded:",
            f"[bold green]{stats.files_downloaded}[/bold green] "
            f"({format_size(stats.bytes_downloaded)})",
        )
        table.add_row("✓ Deleted:", f"[bold green]{stats.files_deleted}[/bold green]")
    if stats.aborted:
        table.add_row("✗ Stopped early:", f"[bold red]{escape(stats.aborted_by)}[/bold red]")
        table.add_row("○ Not reached:", f"[yellow]{stats.files_skipped}[/yellow]")
    table.add_row("Duration:", format_duration(duration_s))

    if stats.aborted:
        title, style = "[bold red]Sweep Aborted[/bold red]", "red"
    elif stats.dry_run:
        title, style = "[bold cyan]Dry Run Complete[/bold cyan]", "cyan"
    else:
        title, style = "[bold green]Sweep Complete[/bold green]", "green"

    console.print(Panel(table, title=title, border_style=style, expand=False))
