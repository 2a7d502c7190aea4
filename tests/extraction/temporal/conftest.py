"""Test fixtures for milestone extraction tests.

Provides:
- The shared locale registry and per-language locales
- An extractor factory taking settings overrides
"""

from __future__ import annotations

from typing import Callable

import pytest

from milestone_timeline.configuration.settings import TimelineSettings
from milestone_timeline.extraction.temporal.locales import LocaleConfig, LocaleRegistry, get_locale_registry
from milestone_timeline.extraction.temporal.markers import MilestoneExtractor


# ---------------------------------------------------------------------------
# Locales
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> LocaleRegistry:
    return get_locale_registry()


@pytest.fixture
def en(registry: LocaleRegistry) -> LocaleConfig:
    return registry.lookup("en")


@pytest.fixture
def es(registry: LocaleRegistry) -> LocaleConfig:
    return registry.lookup("es")


@pytest.fixture
def fr(registry: LocaleRegistry) -> LocaleConfig:
    return registry.lookup("fr")


@pytest.fixture
def ja(registry: LocaleRegistry) -> LocaleConfig:
    return registry.lookup("ja")


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


@pytest.fixture
def make_extractor() -> Callable[..., MilestoneExtractor]:
    """Build an extractor from keyword overrides of the default settings."""

    def _make(**overrides) -> MilestoneExtractor:
        return MilestoneExtractor(TimelineSettings(**overrides))

    return _make


@pytest.fixture
def extractor(make_extractor) -> MilestoneExtractor:
    return make_extractor()
