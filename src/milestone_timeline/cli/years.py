"""CLI commands for curating bare year references."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from milestone_timeline.cli.common import console, echo_json, exit_with_error
from milestone_timeline.errors import MilestoneTimelineError
from milestone_timeline.extraction.temporal.years import annotate_year
from milestone_timeline.ingestion.obsidian.vault import collect_year_candidates, read_note

years_app = typer.Typer(help="Find and tag unstructured year references")


@years_app.command("scan")
def scan_years(
    vault: Path = typer.Argument(..., help="Vault or folder of markdown notes"),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """List 4-digit years that are not part of a structured date."""

    try:
        candidates = collect_year_candidates(vault)
    except MilestoneTimelineError as exc:
        exit_with_error(exc)

    if json_output:
        echo_json([c.to_dict() for c in candidates])
        return

    if not candidates:
        console.print("No unstructured year references found.")
        return

    table = Table(title=f"Possible year references ({len(candidates)})")
    table.add_column("File", style="green")
    table.add_column("Line", style="cyan", justify="right")
    table.add_column("Year", style="yellow")
    table.add_column("Context")
    for candidate in candidates:
        table.add_row(
            escape(candidate.document or ""),
            str(candidate.line_number),
            str(candidate.year),
            escape(candidate.context),
        )
    console.print(table)
    console.print("Tag one with: milestone-timeline years tag FILE LINE YEAR")


@years_app.command("tag")
def tag_year(
    file: Path = typer.Argument(..., help="Note to update"),
    line: int = typer.Argument(..., help="1-based line number"),
    year: int = typer.Argument(..., help="Year to tag"),
) -> None:
    """Append #year/YEAR after the year on LINE of FILE."""

    try:
        text = read_note(file)
        updated = annotate_year(text, line, year)
    except MilestoneTimelineError as exc:
        exit_with_error(exc)

    if updated == text:
        console.print(f"Line {line} of {escape(str(file))} is already tagged with #year/{year}")
        return

    file.write_text(updated, encoding="utf-8")
    console.print(f"Tagged {year} on line {line} of {escape(str(file))}")
