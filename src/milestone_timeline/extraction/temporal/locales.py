"""Locale tables for multi-language date recognition.

Each supported language contributes a fixed table of month spellings and an
ordinal-suffix pattern. Everything derived from the tables (month
alternations, compiled regular expressions, the dateutil ``parserinfo`` used
by the fallback parse and the inline pattern catalog) is built once, when the
registry is constructed, and shared by every scan.

Supported languages: en, es, fr, ja. Unknown codes resolve to English.
Japanese also reads the year-first form ``1958年8月15日`` (day optional).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"


# ---------------------------------------------------------------------------
# Locale Tables
# ---------------------------------------------------------------------------

# Full display names, then extra accepted spellings keyed by 0-based month.
_EN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_EN_ALIASES = {
    0: ("jan",), 1: ("feb",), 2: ("mar",), 3: ("apr",), 5: ("jun",),
    6: ("jul",), 7: ("aug",), 8: ("sep", "sept"), 9: ("oct",),
    10: ("nov",), 11: ("dec",),
}

_ES_MONTHS = (
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
)
_ES_ALIASES = {
    0: ("ene",), 1: ("feb",), 2: ("mar",), 3: ("abr",), 4: ("may",),
    5: ("jun",), 6: ("jul",), 7: ("ago",), 8: ("setiembre", "sep", "sept"),
    9: ("oct",), 10: ("nov",), 11: ("dic",),
}

_FR_MONTHS = (
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
)
_FR_ALIASES = {
    0: ("janv",), 1: ("fevrier", "févr", "fevr", "fév", "fev"), 3: ("avr",),
    6: ("juil",), 7: ("aout",), 8: ("sept",), 9: ("oct",), 10: ("nov",),
    11: ("decembre", "déc", "dec"),
}

_JA_MONTHS = tuple(f"{month}月" for month in range(1, 13))


# ---------------------------------------------------------------------------
# Locale Configuration
# ---------------------------------------------------------------------------


def _alternation(spellings: Sequence[str]) -> str:
    """Regex alternation, longest spelling first so prefixes never shadow."""
    ordered = sorted(set(spellings), key=lambda s: (-len(s), s))
    return "|".join(re.escape(s) for s in ordered)


def _make_parserinfo(
    month_index: Mapping[str, int],
    jump_words: Sequence[str],
) -> dateutil_parser.parserinfo:
    """Build a dateutil ``parserinfo`` that knows a locale's month spellings."""
    months: List[List[str]] = [[] for _ in range(12)]
    for spelling, index in month_index.items():
        months[index].append(spelling)

    class _LocaleParserInfo(dateutil_parser.parserinfo):
        def __init__(self) -> None:
            # parserinfo.__init__ converts these into its lookup tables
            self.MONTHS = [tuple(spellings) for spellings in months]
            self.JUMP = list(dateutil_parser.parserinfo.JUMP) + list(jump_words)
            super().__init__()

    return _LocaleParserInfo()


@dataclass(frozen=True, eq=False)
class LocaleConfig:
    """Immutable month and ordinal table for one language.

    Attributes:
        code: Language code (``en``, ``es``, ...)
        name: Human readable language name
        month_names: Full display names indexed 0-11
        month_index: Every accepted lowercase spelling mapped to its 0-based month
        ordinal_pattern: Regex fragment matching ordinal suffixes, if any
        connectors: Words allowed between day, month and year ("7 de marzo")
        filler_words: Extra words the fallback parser may skip ("le 12 avril")
        year_month_day: Year, month and day markers of a year-first notation
            ("年", "月", "日"), if the language writes dates that way
    """

    code: str
    name: str
    month_names: Tuple[str, ...]
    month_index: Mapping[str, int]
    ordinal_pattern: Optional[str] = None
    connectors: Tuple[str, ...] = ()
    filler_words: Tuple[str, ...] = ()
    year_month_day: Optional[Tuple[str, str, str]] = None

    # Derived, built in __post_init__
    month_pattern: str = field(init=False, repr=False)
    month_year_re: re.Pattern[str] = field(init=False, repr=False)
    ordinal_re: Optional[re.Pattern[str]] = field(init=False, repr=False)
    year_month_day_re: Optional[re.Pattern[str]] = field(init=False, repr=False)
    parserinfo: dateutil_parser.parserinfo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        month_pattern = _alternation(list(self.month_index))
        object.__setattr__(self, "month_pattern", month_pattern)
        object.__setattr__(
            self,
            "month_year_re",
            re.compile(
                rf"^({month_pattern})\.?\s+{self.connector_pattern}(\d{{4}})$", re.IGNORECASE
            ),
        )
        year_month_day_re = None
        if self.year_month_day:
            year_month_day_re = re.compile(rf"^{self.year_month_day_pattern}$")
        object.__setattr__(self, "year_month_day_re", year_month_day_re)
        ordinal_re = None
        if self.ordinal_pattern:
            ordinal_re = re.compile(
                rf"(\d{{1,2}})(?:{self.ordinal_pattern})(?!\w)", re.IGNORECASE
            )
        object.__setattr__(self, "ordinal_re", ordinal_re)
        object.__setattr__(
            self,
            "parserinfo",
            _make_parserinfo(self.month_index, self.connectors + self.filler_words),
        )

    @classmethod
    def from_table(
        cls,
        code: str,
        name: str,
        month_names: Sequence[str],
        aliases: Optional[Dict[int, Tuple[str, ...]]] = None,
        **kwargs,
    ) -> "LocaleConfig":
        """Build a locale from display names plus extra accepted spellings."""
        index: Dict[str, int] = {}
        for month, display in enumerate(month_names):
            index[display.lower()] = month
        for month, spellings in (aliases or {}).items():
            for spelling in spellings:
                index.setdefault(spelling.lower(), month)
        return cls(
            code=code,
            name=name,
            month_names=tuple(month_names),
            month_index=MappingProxyType(index),
            **kwargs,
        )

    @property
    def connector_pattern(self) -> str:
        """Optional connector word plus whitespace, or "" without connectors."""
        if not self.connectors:
            return ""
        return rf"(?:(?:{_alternation(self.connectors)})\s+)?"

    @property
    def year_month_day_pattern(self) -> Optional[str]:
        """Year-first notation with groups (year, month, day); day may be absent."""
        if not self.year_month_day:
            return None
        year, month, day = (re.escape(marker) for marker in self.year_month_day)
        return rf"(\d{{4}}){year}\s*(\d{{1,2}}){month}(?:\s*(\d{{1,2}})(?:{day})?)?"

    def month_number(self, spelling: str) -> Optional[int]:
        """Return the 1-based month for a spelling, or None if unknown."""
        index = self.month_index.get(spelling.lower().rstrip("."))
        return None if index is None else index + 1

    def month_name(self, month: int) -> str:
        """Display name for a 1-based month."""
        return self.month_names[month - 1]

    def strip_ordinals(self, text: str) -> str:
        """Remove ordinal suffixes attached to day numbers ("10th" -> "10")."""
        if self.ordinal_re is None:
            return text
        return self.ordinal_re.sub(r"\1", text)


# ---------------------------------------------------------------------------
# Inline Pattern Catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatePattern:
    """One entry of the inline pattern catalog.

    ``locale`` is set for month-name patterns and used as the primary locale
    when the matched text is parsed.
    """

    name: str
    regex: re.Pattern[str]
    locale: Optional[LocaleConfig] = None


ISO_DATE_PATTERN = re.compile(r"(?<!\[\[)\b(\d{4}-\d{1,2}-\d{1,2})\b(?!\]\])")
NUMERIC_DATE_PATTERN = re.compile(
    r"(?<!\[\[)\b(\d{1,2}[-/]\d{1,2}[-/]\d{4})\b(?!\]\])"
)
NUMERIC_SHORT_YEAR_PATTERN = re.compile(
    r"(?<!\[\[)\b(\d{1,2}[-/]\d{1,2}[-/]\d{2})\b(?![-/\d]|\]\])"
)
PLACEHOLDER_DATE_PATTERN = re.compile(
    r"\b((?:\d{1,2}|dd|mm)[-/](?:\d{1,2}|dd|mm)[-/](?:\d{4}|yyyy))\b",
    re.IGNORECASE,
)
BARE_YEAR_PATTERN = re.compile(
    r"(?<![\d\-/#])(?<!\[\[)\b(1\d{3}|20\d{2}|2100)\b(?![\d\-/])(?!\]\])"
)


def _month_mention_re(spellings: Sequence[str]) -> re.Pattern[str]:
    """Find a month spelling of any language as a standalone word.

    Spellings that start with a digit ("8月") only need a non-digit before them.
    """
    words = [s for s in spellings if not s[0].isdigit()]
    numbered = [s for s in spellings if s[0].isdigit()]
    parts = [rf"(?<!\w)(?:{_alternation(words)})(?!\w)"]
    if numbered:
        parts.append(rf"(?<!\d)(?:{_alternation(numbered)})")
    return re.compile("|".join(parts), re.IGNORECASE)


def _locale_patterns(locale: LocaleConfig) -> List[DatePattern]:
    months = locale.month_pattern
    ordinal = f"(?:{locale.ordinal_pattern})?" if locale.ordinal_pattern else ""
    connector = locale.connector_pattern
    flags = re.IGNORECASE
    patterns = []
    if locale.year_month_day_pattern:
        patterns.append(
            DatePattern(
                f"{locale.code}:year_month_day",
                re.compile(rf"(?<!\d)({locale.year_month_day_pattern})(?!\d)"),
                locale,
            )
        )
    patterns.extend([
        DatePattern(
            f"{locale.code}:day_month_year",
            re.compile(
                rf"\b(\d{{1,2}}{ordinal}\s+{connector}(?:{months})\.?,?\s+{connector}\d{{4}})\b",
                flags,
            ),
            locale,
        ),
        DatePattern(
            f"{locale.code}:month_day_year",
            re.compile(
                rf"\b((?:{months})\.?\s+\d{{1,2}}{ordinal},?\s+\d{{4}})\b",
                flags,
            ),
            locale,
        ),
        DatePattern(
            f"{locale.code}:month_year",
            re.compile(rf"\b((?:{months})\.?\s+{connector}\d{{4}})\b", flags),
            locale,
        ),
    ])
    return patterns


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class LocaleRegistry:
    """Lookup table of supported locales plus the derived pattern sets.

    Iteration order is registration order; the multi-locale resolver and the
    inline pattern catalog both follow it.
    """

    def __init__(
        self,
        locales: Sequence[LocaleConfig],
        default: str = DEFAULT_LANGUAGE,
    ) -> None:
        self._locales: Dict[str, LocaleConfig] = {loc.code: loc for loc in locales}
        if default not in self._locales:
            raise ValueError(f"Default locale {default!r} is not registered")
        self.default = self._locales[default]

        all_months = [s for loc in self for s in loc.month_index]
        self.all_month_pattern = _alternation(all_months)
        self.month_mention_re = _month_mention_re(all_months)
        ordinals = [loc.ordinal_pattern for loc in self if loc.ordinal_pattern]
        self.ordinal_marker_re = re.compile(
            rf"\d(?:{'|'.join(ordinals)})", re.IGNORECASE
        )
        self.link_re = re.compile(
            rf"\[\[([\d-]+|(?:{self.all_month_pattern})\s+\d{{4}})\]\]",
            re.IGNORECASE,
        )
        self.patterns = self._build_catalog()

    def __iter__(self) -> Iterator[LocaleConfig]:
        return iter(self._locales.values())

    def __len__(self) -> int:
        return len(self._locales)

    def __contains__(self, code: object) -> bool:
        return code in self._locales

    @property
    def codes(self) -> List[str]:
        return list(self._locales)

    def lookup(self, code: Optional[str]) -> LocaleConfig:
        """Return the locale for ``code``, or the default locale if unknown."""
        locale = self._locales.get((code or "").lower())
        if locale is None:
            logger.debug(f"Unknown locale {code!r}, using {self.default.code}")
            return self.default
        return locale

    def _build_catalog(self) -> List[DatePattern]:
        catalog = [
            DatePattern("iso", ISO_DATE_PATTERN),
            DatePattern("numeric", NUMERIC_DATE_PATTERN),
            DatePattern("numeric_short_year", NUMERIC_SHORT_YEAR_PATTERN),
            DatePattern("placeholder", PLACEHOLDER_DATE_PATTERN),
        ]
        for locale in self:
            catalog.extend(_locale_patterns(locale))
        return catalog


def build_default_locales() -> List[LocaleConfig]:
    """The built-in locale tables, in registry order."""
    return [
        LocaleConfig.from_table(
            "en", "English", _EN_MONTHS, _EN_ALIASES,
            ordinal_pattern="st|nd|rd|th",
            connectors=("of",),
        ),
        LocaleConfig.from_table(
            "es", "Español", _ES_MONTHS, _ES_ALIASES,
            ordinal_pattern="º|ª|°",
            connectors=("de", "del"),
        ),
        LocaleConfig.from_table(
            "fr", "Français", _FR_MONTHS, _FR_ALIASES,
            ordinal_pattern="ère|ème|eme|er|re|e",
            filler_words=("le",),
        ),
        LocaleConfig.from_table(
            "ja", "日本語", _JA_MONTHS,
            ordinal_pattern="日",
            year_month_day=("年", "月", "日"),
        ),
    ]


@lru_cache(maxsize=1)
def get_locale_registry() -> LocaleRegistry:
    """Shared registry of the built-in locales."""
    return LocaleRegistry(build_default_locales())
