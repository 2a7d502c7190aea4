"""Unit tests for the locale registry.

Tests for:
- Lookup with default fallback
- Month spellings, abbreviations and unaccented variants
- Ordinal stripping per language
- Derived pattern catalog
"""

from __future__ import annotations

import pytest

from milestone_timeline.extraction.temporal.locales import (
    DEFAULT_LANGUAGE,
    LocaleConfig,
    LocaleRegistry,
    build_default_locales,
)


class TestLookup:
    """Tests for LocaleRegistry.lookup."""

    def test_known_codes(self, registry):
        """Every supported language resolves to its own table."""
        for code in ("en", "es", "fr", "ja"):
            assert registry.lookup(code).code == code

    def test_lookup_is_case_insensitive(self, registry):
        assert registry.lookup("FR").code == "fr"

    def test_unknown_code_falls_back_to_default(self, registry):
        """Unknown or missing codes yield the default language."""
        assert registry.lookup("de") is registry.default
        assert registry.lookup(None).code == DEFAULT_LANGUAGE

    def test_iteration_follows_registration_order(self, registry):
        assert registry.codes == ["en", "es", "fr", "ja"]
        assert len(registry) == 4
        assert "ja" in registry

    def test_default_must_be_registered(self):
        with pytest.raises(ValueError):
            LocaleRegistry(build_default_locales(), default="de")


class TestMonthTables:
    """Tests for month spellings."""

    def test_full_display_names(self, en, fr):
        assert en.month_name(1) == "January"
        assert fr.month_name(8) == "Août"
        assert len(en.month_names) == 12

    @pytest.mark.parametrize(
        "code,spelling,month",
        [
            ("en", "Sept.", 9),
            ("en", "may", 5),
            ("es", "Marzo", 3),
            ("es", "setiembre", 9),
            ("fr", "Mars", 3),
            ("fr", "aout", 8),
            ("fr", "Décembre", 12),
            ("ja", "8月", 8),
            ("ja", "12月", 12),
        ],
    )
    def test_month_number(self, registry, code, spelling, month):
        assert registry.lookup(code).month_number(spelling) == month

    def test_unknown_spelling(self, en):
        assert en.month_number("Mars") is None

    def test_alternation_prefers_longest_spelling(self, en):
        """Longer spellings come first so "sep" never shadows "september"."""
        spellings = en.month_pattern.split("|")
        assert spellings[0] == "september"
        assert spellings.index("sept") < spellings.index("sep")

    def test_month_index_is_read_only(self, en):
        with pytest.raises(TypeError):
            en.month_index["foo"] = 1


class TestOrdinals:
    """Tests for ordinal suffix stripping."""

    def test_english(self, en):
        assert en.strip_ordinals("April 10th, 1992") == "April 10, 1992"
        assert en.strip_ordinals("1st of May") == "1 of May"

    def test_french(self, fr):
        assert fr.strip_ordinals("1er Mai 2024") == "1 Mai 2024"
        assert fr.strip_ordinals("2ème jour") == "2 jour"

    def test_spanish(self, es):
        assert es.strip_ordinals("15º de Enero") == "15 de Enero"

    def test_japanese(self, ja):
        assert ja.strip_ordinals("15日") == "15"

    def test_words_are_left_alone(self, en):
        assert en.strip_ordinals("the 4thousand") == "the 4thousand"


class TestDerivedPatterns:
    """Tests for the catalog and cross-language helpers built once per registry."""

    def test_catalog_order(self, registry):
        names = [pattern.name for pattern in registry.patterns]
        assert names[:4] == ["iso", "numeric", "numeric_short_year", "placeholder"]
        assert names[4:7] == ["en:day_month_year", "en:month_day_year", "en:month_year"]
        assert names[-1] == "ja:month_year"
        assert names.index("ja:year_month_day") == names.index("ja:day_month_year") - 1

    def test_catalog_locales(self, registry):
        for pattern in registry.patterns[4:]:
            assert isinstance(pattern.locale, LocaleConfig)
            assert pattern.name.startswith(pattern.locale.code)

    def test_month_mentions(self, registry):
        assert registry.month_mention_re.search("May 1945")
        assert registry.month_mention_re.search("le 3 août")
        assert registry.month_mention_re.search("1958年8月")
        assert not registry.month_mention_re.search("Room 1945 was empty")

    def test_month_mentions_need_word_boundaries(self, registry):
        assert not registry.month_mention_re.search("Summary")

    def test_link_pattern(self, registry):
        assert registry.link_re.search("[[2024-03-15]]").group(1) == "2024-03-15"
        assert registry.link_re.search("[[Mars 1947]]").group(1) == "Mars 1947"
        assert registry.link_re.search("[[Meeting notes]]") is None
