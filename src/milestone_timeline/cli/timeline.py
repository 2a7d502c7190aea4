"""CLI commands for building a milestone timeline from a vault."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from milestone_timeline.cli.common import console, echo_json, exit_with_error
from milestone_timeline.configuration.settings import DEFAULT_CONFIG_PATH, resolve_settings
from milestone_timeline.errors import MilestoneTimelineError
from milestone_timeline.extraction.temporal.markers import DATE_FORMAT_VALUES
from milestone_timeline.ingestion.obsidian.vault import collect_milestones
from milestone_timeline.timeline import (
    TimelineRowKind,
    build_timeline,
    filter_milestones,
    sort_milestones,
)

timeline_app = typer.Typer(help="Build timelines from dated notes")


@timeline_app.command("scan")
def scan_timeline(
    vault: Path = typer.Argument(..., help="Vault or folder of markdown notes"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Fuzzy filter on title, context, date or path"),
    order: Optional[str] = typer.Option(None, "--order", help="Sort order: asc or desc"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Language: en, es, fr, ja"),
    date_format: Optional[str] = typer.Option(
        None, "--date-format", help="Numeric dates: US (m/d/yyyy) or International (d/m/yyyy)"
    ),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Path to config file"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Extract milestones from every note in VAULT and print them in date order.

    Examples:
        milestone-timeline timeline scan ~/Notes
        milestone-timeline timeline scan ~/Letters --language fr --date-format International
    """
    overrides = {
        "sort_order": order.lower() if order else None,
        "language": language,
        "date_format": DATE_FORMAT_VALUES.get(date_format.lower(), date_format) if date_format else None,
    }
    try:
        settings = resolve_settings(config_path, overrides)
        all_milestones = collect_milestones(vault, settings)
    except MilestoneTimelineError as exc:
        exit_with_error(exc)

    milestones = filter_milestones(all_milestones, query or "")

    if json_output:
        echo_json([m.to_dict() for m in sort_milestones(milestones, settings.sort_order)])
        return

    if not milestones:
        console.print("No milestones found.")
        return

    if query:
        console.print(f"Showing {len(milestones)} of {len(all_milestones)} milestones")

    table = Table(title=f"Milestones in {escape(str(vault))}")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title", style="green")
    table.add_column("Context")
    table.add_column("Location", style="magenta")

    for row in build_timeline(milestones, settings):
        if row.kind is TimelineRowKind.YEAR:
            table.add_row(f"[bold]{row.label}[/bold]", "", "", "")
        elif row.kind is TimelineRowKind.MONTH:
            table.add_row(f"  [italic]{row.label}[/italic]", "", "", "")
        else:
            milestone = row.milestone
            label = f"{row.label} ?" if milestone.is_uncertain else row.label
            location = milestone.document
            if milestone.line_number:
                location = f"{location}:{milestone.line_number}"
            context = milestone.context
            if milestone.heading:
                context = f"{milestone.heading}: {context}"
            table.add_row(label, escape(milestone.title), escape(context), escape(location))

    console.print(table)
