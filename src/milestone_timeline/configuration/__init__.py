"""Configuration loading utilities for milestone-timeline."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    TimelineSettings,
    bootstrap_settings,
    load_settings,
    resolve_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "TimelineSettings",
    "bootstrap_settings",
    "load_settings",
    "resolve_settings",
    "save_settings",
]
