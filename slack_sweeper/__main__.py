"""
Main entry point for the slack-sweeper application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from slack_sweeper.cli.app import app
from slack_sweeper.cli.formatters import format_error_with_suggestions
from slack_sweeper.exceptions import SlackAPIError, SweeperError


def slack_error_context(error: BaseException) -> dict | None:
    """Pulls the Slack method and error code out of an error or its cause."""
    while error is not None:
        if isinstance(error, SlackAPIError):
            return {"method": error.method, "slack_error": error.error}
        error = error.__cause__
    return None


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("slack_sweeper")
    console = Console()

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print(
            "\n[yellow]⚠️  Sweep cancelled. Files already downloaded stay on disk;"
            " the file in progress was not deleted from Slack.[/yellow]"
        )
        sys.exit(0)
    except SweeperError as e:
        console.print(f"\n{format_error_with_suggestions(e, slack_error_context(e))}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
