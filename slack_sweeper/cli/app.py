"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import time
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from slack_sweeper import __version__
from slack_sweeper.api.client import SlackAPIClient
from slack_sweeper.core.sweep_manager import SweepManager
from slack_sweeper.exceptions import ConfigurationError
from slack_sweeper.media.downloader import Downloader
from slack_sweeper.models.config import (
    DEFAULT_CUTOFF_DAYS,
    DEFAULT_MIN_CANDIDATES,
    SweepConfig,
)

from .formatters import print_run_header, print_summary_panel

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
log = logging.getLogger("slack_sweeper")

app = typer.Typer(
    name="slack-sweeper",
    help="Download Slack files older than a cutoff and optionally delete them.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _version_callback(value: bool):
    if value:
        console.print(f"[bold]slack-sweeper[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()


def build_config(**options) -> SweepConfig:
    """Validates CLI options into a SweepConfig."""
    try:
        return SweepConfig(**options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid options:\n{e}") from e


async def run_sweep(config: SweepConfig):
    """Runs one sweep and makes sure every HTTP session is closed afterwards."""
    api_client = SlackAPIClient(config.token)
    downloader = Downloader(config.token)
    try:
        manager = SweepManager(config, api_client, downloader)
        return await manager.run()
    finally:
        await downloader.close()
        await api_client.close()


@app.command()
def sweep(
    token: str | None = typer.Option(
        None,
        "--token",
        envvar="SLACK_TOKEN",
        help="Slack API token for authentication.",
        show_default=False,
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Only list what would be downloaded (default)."
    ),
    run_delete: bool = typer.Option(
        False, "--run-delete", help="Download files, then delete them from Slack."
    ),
    destination: Path = typer.Option(
        Path("."),
        "--destination",
        "--dest",
        help="Download file destination.",
    ),
    cutoff_days: float = typer.Option(
        DEFAULT_CUTOFF_DAYS,
        "--cutoff-days",
        help="Number of days to preserve files for.",
    ),
    min_candidates: int = typer.Option(
        DEFAULT_MIN_CANDIDATES,
        "--min-candidates",
        help="Stop paging once at least this many files are queued.",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_version_callback,
    ),
):
    """Archive Slack files older than the cutoff, channel by channel."""
    if dry_run and run_delete:
        raise typer.BadParameter(
            "--dry-run and --run-delete are mutually exclusive.",
            param_hint="'--run-delete'",
        )

    logging.getLogger("slack_sweeper").setLevel("DEBUG" if verbose >= 2 else "INFO")

    config = build_config(
        token=token or "",
        destination=destination,
        cutoff_days=cutoff_days,
        run_delete=run_delete,
        min_candidates=min_candidates,
    )
    print_run_header(config, console)

    start_time = time.monotonic()
    stats = asyncio.run(run_sweep(config))
    print_summary_panel(stats, time.monotonic() - start_time, console)
    console.print("DONE")
