"""Tests for milestone-timeline configuration settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from milestone_timeline.configuration.settings import (
    TimelineSettings,
    bootstrap_settings,
    load_settings,
    resolve_settings,
    save_settings,
)
from milestone_timeline.errors import InvalidConfigError, MissingConfigError
from milestone_timeline.extraction.temporal.models import DateFormatPreference


def test_defaults() -> None:
    settings = TimelineSettings()

    assert settings.language == "en"
    assert settings.date_format == DateFormatPreference.US
    assert settings.include_tag_dates is True
    assert settings.include_year_only is False
    assert settings.exclude_screenshots is True
    assert settings.sort_order == "asc"
    assert settings.month_threshold == 10
    assert settings.show_year_markers_with_year_only is True


def test_settings_are_frozen() -> None:
    settings = TimelineSettings()
    with pytest.raises(ValidationError):
        settings.language = "fr"


def test_language_normalized() -> None:
    assert TimelineSettings(language=" FR ").language == "fr"
    with pytest.raises(ValidationError):
        TimelineSettings(language="  ")


def test_month_threshold_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        TimelineSettings(month_threshold=0)


def test_bootstrap_creates_default_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    settings = bootstrap_settings(path=config_path)

    assert config_path.exists()
    data = json.loads(config_path.read_text())
    assert data["language"] == "en"
    assert data["date_format"] == "US"
    assert settings == TimelineSettings()


def test_bootstrap_applies_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    settings = bootstrap_settings(
        path=config_path, overrides={"language": "es", "date_format": "International"}
    )

    assert settings.language == "es"
    assert settings.date_format == DateFormatPreference.INTERNATIONAL
    assert load_settings(config_path) == settings


def test_load_settings_round_trip(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    settings = TimelineSettings(language="ja", sort_order="desc", month_threshold=3)
    save_settings(settings, config_path)

    assert load_settings(config_path) == settings


def test_load_missing(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigError):
        load_settings(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")
    with pytest.raises(InvalidConfigError) as exc_info:
        load_settings(config_path)
    assert exc_info.value.details == {"path": str(config_path)}


def test_load_invalid_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"sort_order": "sideways"}))
    with pytest.raises(InvalidConfigError):
        load_settings(config_path)


def test_env_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MILESTONE_TIMELINE_LANGUAGE", "fr")
    monkeypatch.setenv("MILESTONE_TIMELINE_INCLUDE_YEAR_ONLY", "yes")
    monkeypatch.setenv("MILESTONE_TIMELINE_MONTH_THRESHOLD", "4")

    settings = bootstrap_settings(path=tmp_path / "config.json")

    assert settings.language == "fr"
    assert settings.include_year_only is True
    assert settings.month_threshold == 4


def test_env_override_bad_integer(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MILESTONE_TIMELINE_MONTH_THRESHOLD", "many")
    with pytest.raises(InvalidConfigError):
        resolve_settings(tmp_path / "config.json")


def test_resolve_without_file_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    assert resolve_settings(config_path) == TimelineSettings()
    assert not config_path.exists()


def test_resolve_precedence(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.json"
    save_settings(TimelineSettings(language="es", sort_order="desc"), config_path)
    monkeypatch.setenv("MILESTONE_TIMELINE_LANGUAGE", "fr")

    settings = resolve_settings(config_path, overrides={"sort_order": "asc", "language": None})

    assert settings.language == "fr"
    assert settings.sort_order == "asc"

    settings = resolve_settings(config_path, overrides={"language": "ja"})
    assert settings.language == "ja"
