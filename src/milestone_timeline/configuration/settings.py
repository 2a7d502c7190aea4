"""Typed settings for milestone-timeline.

User configuration is wrapped in a frozen Pydantic model, so the extractor
receives one immutable snapshot per run and no module keeps mutable
configuration state. Settings persist as JSON and can be overridden from the
environment.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from milestone_timeline.errors import InvalidConfigError, MissingConfigError
from milestone_timeline.extraction.temporal.models import DateFormatPreference

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".milestone-timeline" / "config.json"
ENV_PREFIX = "MILESTONE_TIMELINE_"


class TimelineSettings(BaseModel):
    """Extraction and presentation settings."""

    model_config = ConfigDict(frozen=True)

    # Extraction
    language: str = Field("en", description="Display and primary parsing language (en, es, fr, ja)")
    date_format: DateFormatPreference = Field(
        DateFormatPreference.US, description="Numeric dates as month/day (US) or day/month"
    )
    include_tag_dates: bool = Field(True, description="Recognize #date/... and #year/... tags")
    include_year_only: bool = Field(False, description="Treat isolated years as milestones")
    exclude_screenshots: bool = Field(True, description="Ignore dates inside image embeds")

    # Presentation
    sort_order: Literal["asc", "desc"] = Field("asc", description="Timeline order")
    month_threshold: int = Field(
        10, ge=1, description="Show month markers for years with at least this many milestones"
    )
    show_year_markers_with_year_only: bool = Field(
        True, description="Keep year markers when year-only extraction is on"
    )

    @field_validator("language")
    def _normalize_language(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("language must not be empty")
        return value


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> TimelineSettings:
    """Load settings from disk or raise if missing or invalid."""

    if not path.exists():
        raise MissingConfigError(
            f"Settings file not found at {path}", details={"path": str(path)}
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(
            f"Settings file is not valid JSON: {exc}", details={"path": str(path)}
        ) from exc
    return _validate(payload, path)


def save_settings(settings: TimelineSettings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk as indented JSON."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(mode="json"), indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> TimelineSettings:
    """Create or load settings, apply overrides and environment, then persist."""

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        logger.debug(f"No settings at {path}; writing defaults")
        settings = TimelineSettings()
        save_settings(settings, path)

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    resolved = _validate(merged, path)
    save_settings(resolved, path)
    return resolved


def resolve_settings(
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> TimelineSettings:
    """Settings for a single run: file if present, else defaults; never writes."""

    settings = load_settings(path) if path.exists() else TimelineSettings()
    merged = _apply_env_overrides(settings.model_dump(mode="python"))
    merged = _apply_overrides(merged, {k: v for k, v in (overrides or {}).items() if v is not None})
    return _validate(merged, path)


def _validate(payload: Any, path: Path) -> TimelineSettings:
    try:
        return TimelineSettings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(
            f"Invalid configuration: {exc}", details={"path": str(path)}
        ) from exc


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    _set_env_override(data, "language", f"{ENV_PREFIX}LANGUAGE")
    _set_env_override(data, "date_format", f"{ENV_PREFIX}DATE_FORMAT")
    _set_env_override(data, "include_tag_dates", f"{ENV_PREFIX}INCLUDE_TAG_DATES", cast_bool=True)
    _set_env_override(data, "include_year_only", f"{ENV_PREFIX}INCLUDE_YEAR_ONLY", cast_bool=True)
    _set_env_override(
        data, "exclude_screenshots", f"{ENV_PREFIX}EXCLUDE_SCREENSHOTS", cast_bool=True
    )
    _set_env_override(data, "sort_order", f"{ENV_PREFIX}SORT_ORDER")
    _set_env_override(data, "month_threshold", f"{ENV_PREFIX}MONTH_THRESHOLD", cast_int=True)
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_bool: bool = False,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_bool:
        mapping[key] = raw.lower() in {"1", "true", "yes"}
    elif cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(
                f"{env_name} must be an integer, got {raw!r}", details={"env": env_name}
            ) from exc
    else:
        mapping[key] = raw
