"""Shared console output for CLI commands."""

from __future__ import annotations

import json
from typing import Any, NoReturn

import typer
from rich.console import Console

from milestone_timeline.errors import MilestoneTimelineError, format_error_for_cli

console = Console()
error_console = Console(stderr=True)


def exit_with_error(error: MilestoneTimelineError) -> NoReturn:
    """Print a user-facing error to stderr and exit with status 1."""
    error_console.print(format_error_for_cli(error), markup=False, highlight=False)
    raise typer.Exit(code=1)


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
