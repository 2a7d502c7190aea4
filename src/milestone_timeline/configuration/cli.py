"""CLI commands for managing milestone-timeline settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer

from milestone_timeline.configuration.settings import (
    DEFAULT_CONFIG_PATH,
    TimelineSettings,
    bootstrap_settings,
    load_settings,
    save_settings,
)
from milestone_timeline.errors import (
    InvalidConfigError,
    MilestoneTimelineError,
    format_error_for_cli,
)

config_app = typer.Typer(help="Manage milestone-timeline configuration")


@config_app.command("init")
def init_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
    language: Optional[str] = typer.Option(None, help="Override language (en, es, fr, ja)"),
    date_format: Optional[str] = typer.Option(None, help="Override numeric date format (US, International)"),
    force: bool = typer.Option(False, "--force", help="Replace an existing file with defaults"),
) -> None:
    """Initialize the settings file."""

    overrides = {}
    if language:
        overrides["language"] = language
    if date_format:
        overrides["date_format"] = date_format

    try:
        if force and config_path.exists():
            save_settings(TimelineSettings(), config_path)
        settings = bootstrap_settings(path=config_path, overrides=overrides)
    except MilestoneTimelineError as exc:
        _fail(exc)

    typer.echo(f"Configuration initialized at {config_path}")
    typer.echo(_summarize_settings(settings))


@config_app.command("show")
def show_config(config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config")) -> None:
    """Display the stored configuration."""

    try:
        settings = load_settings(config_path)
    except MilestoneTimelineError as exc:
        _fail(exc)
    typer.echo(_summarize_settings(settings))


@config_app.command("set")
def set_config(
    key: str = typer.Argument(..., help="Configuration key, e.g. month_threshold"),
    value: str = typer.Argument(..., help="New value"),
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config"),
) -> None:
    """Update a configuration value."""

    try:
        settings = load_settings(config_path)
        if key not in TimelineSettings.model_fields:
            raise InvalidConfigError(f"Unknown setting {key!r}", details={"key": key})
        payload = settings.model_dump(mode="python")
        payload[key] = value
        updated = TimelineSettings.model_validate(payload)
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError
        _fail(InvalidConfigError(str(exc), details={"key": key}))
    except MilestoneTimelineError as exc:
        _fail(exc)

    save_settings(updated, config_path)
    typer.echo(f"Updated {key}")


@config_app.command("validate")
def validate_config(
    config_path: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to config file"),
) -> None:
    """Validate configuration file for correctness."""

    try:
        settings = load_settings(config_path)
    except MilestoneTimelineError as e:
        typer.echo(f"❌ Configuration invalid: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"✅ Configuration valid at {config_path}")
    typer.echo(f"   Language: {settings.language}")
    typer.echo(f"   Date format: {settings.date_format.value}")
    typer.echo(f"   Sort order: {settings.sort_order}")


def _summarize_settings(settings: TimelineSettings) -> str:
    data = settings.model_dump(mode="json")
    return json.dumps(data, indent=2)


def _fail(error: MilestoneTimelineError) -> NoReturn:
    typer.echo(format_error_for_cli(error), err=True)
    raise typer.Exit(code=1)
