"""Date parsing with partial-date defaults and locale fallback.

``parse_date`` resolves one candidate string against one locale by trying a
fixed precedence of notations, first match wins:

1. Placeholder numeric date (``05/dd/1985``, ``mm/15/1985``)
   Locales with a year-first notation also accept ``1958年8月15日`` here;
   without a day it resolves to the 15th like a month-name date
2. Month name + year (``March 1947``, ``Mars 1947``) -> 15th of the month
3. Year only (``1947``) -> July 1
4. Year-month (``1947-03``) -> 15th of the month
5. Numeric date, 4-digit year (``3/15/1947``)
6. Numeric date, 2-digit year (``3/15/47``), pivot at 30
7. General parse with dateutil using the locale's month spellings

Partial results (steps 1-4) carry ``is_partial=True``. Every step validates
the year range [1000, 2100] and the calendar date itself; failures return
``None`` and are never raised.

``parse_date_any_locale`` tries the configured locale first and then every
other registered locale, so notes written in another language still parse.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Optional, Union

from dateutil import parser as dateutil_parser

from milestone_timeline.extraction.temporal.locales import (
    LocaleConfig,
    LocaleRegistry,
    get_locale_registry,
)
from milestone_timeline.extraction.temporal.models import (
    DateFormatPreference,
    ParseResult,
)

logger = logging.getLogger(__name__)


MIN_YEAR = 1000
MAX_YEAR = 2100

# Two-digit years >= pivot are 19xx, below it 20xx
SHORT_YEAR_PIVOT = 30

# Defaults for missing components
MID_YEAR_MONTH = 7
MID_MONTH_DAY = 15
YEAR_ONLY_DAY = 1

# dateutil fills missing fields from this; year 1 is always out of range
_NO_DATE_DEFAULT = datetime(1, 1, 1)


# ---------------------------------------------------------------------------
# Notation Patterns
# ---------------------------------------------------------------------------

PLACEHOLDER_RE = re.compile(
    r"^(\d{1,2}|dd|mm)[-/](\d{1,2}|dd|mm)[-/](\d{4}|yyyy)$", re.IGNORECASE
)
YEAR_ONLY_RE = re.compile(r"^(\d{4})$")
YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
NUMERIC_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$")
NUMERIC_SHORT_YEAR_RE = re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{2})$")
ISO_RE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_valid_year(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def expand_short_year(year: int) -> int:
    """Expand a 2-digit year: 30-99 -> 1930-1999, 00-29 -> 2000-2029."""
    return 1900 + year if year >= SHORT_YEAR_PIVOT else 2000 + year


def _build_date(
    year: int, month: int, day: int, partial: bool = False
) -> Optional[ParseResult]:
    """Construct a validated date, or None if out of range or not a real day."""
    if not is_valid_year(year):
        return None
    try:
        return ParseResult(date(year, month, day), is_partial=partial)
    except ValueError:
        return None


def _month_day(first: int, second: int, preference: DateFormatPreference):
    """Order two leading numeric tokens as (month, day)."""
    if preference == DateFormatPreference.INTERNATIONAL:
        return second, first
    return first, second


def _parse_placeholder(
    match: re.Match, preference: DateFormatPreference
) -> Optional[ParseResult]:
    first, second, year_token = (g.lower() for g in match.groups())
    if year_token == "yyyy":
        return None

    month_token, day_token = _month_day(first, second, preference)

    if month_token == "mm":
        month = MID_YEAR_MONTH
    elif month_token.isdigit():
        month = int(month_token)
    else:
        return None

    if day_token == "dd":
        day = MID_MONTH_DAY
    elif day_token.isdigit():
        day = int(day_token)
    else:
        return None

    return _build_date(int(year_token), month, day, partial=True)


def _parse_numeric(
    match: re.Match, preference: DateFormatPreference, short_year: bool = False
) -> Optional[ParseResult]:
    first, second, year = (int(g) for g in match.groups())
    if short_year:
        year = expand_short_year(year)
    month, day = _month_day(first, second, preference)
    return _build_date(year, month, day)


def _parse_general(
    text: str, preference: DateFormatPreference, locale: LocaleConfig
) -> Optional[ParseResult]:
    iso = ISO_RE.match(text)
    if iso:
        year, month, day = (int(g) for g in iso.groups())
        return _build_date(year, month, day)

    try:
        parsed = dateutil_parser.parse(
            text,
            parserinfo=locale.parserinfo,
            default=_NO_DATE_DEFAULT,
            dayfirst=preference == DateFormatPreference.INTERNATIONAL,
        )
    except (ValueError, OverflowError) as e:
        logger.debug(f"Unparseable date {text!r} for locale {locale.code}: {e}")
        return None

    return _build_date(parsed.year, parsed.month, parsed.day)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_date(
    text: str,
    preference: DateFormatPreference = DateFormatPreference.US,
    locale: Optional[LocaleConfig] = None,
) -> Optional[ParseResult]:
    """Parse a candidate date string in a single locale.

    Args:
        text: Candidate date text, e.g. "April 10th, 1992" or "05/dd/1985"
        preference: Whether numeric dates are month-first or day-first
        locale: Locale providing month spellings (defaults to English)

    Returns:
        ParseResult, or None when the text is not a valid date
    """
    if locale is None:
        locale = get_locale_registry().default

    cleaned = locale.strip_ordinals(text.strip())
    if not cleaned:
        return None

    placeholder = PLACEHOLDER_RE.match(cleaned)
    if placeholder and not all(g.isdigit() for g in placeholder.groups()):
        return _parse_placeholder(placeholder, preference)

    if locale.year_month_day_re is not None:
        year_first = locale.year_month_day_re.match(cleaned)
        if year_first:
            year, month, day = year_first.groups()
            if day is None:
                return _build_date(int(year), int(month), MID_MONTH_DAY, partial=True)
            return _build_date(int(year), int(month), int(day))

    month_year = locale.month_year_re.match(cleaned)
    if month_year:
        month = locale.month_number(month_year.group(1))
        if month is None:
            return None
        return _build_date(int(month_year.group(2)), month, MID_MONTH_DAY, partial=True)

    year_only = YEAR_ONLY_RE.match(cleaned)
    if year_only:
        return _build_date(
            int(year_only.group(1)), MID_YEAR_MONTH, YEAR_ONLY_DAY, partial=True
        )

    year_month = YEAR_MONTH_RE.match(cleaned)
    if year_month:
        year, month = (int(g) for g in year_month.groups())
        if not 1 <= month <= 12:
            return None
        return _build_date(year, month, MID_MONTH_DAY, partial=True)

    numeric = NUMERIC_RE.match(cleaned)
    if numeric:
        return _parse_numeric(numeric, preference)

    numeric_short = NUMERIC_SHORT_YEAR_RE.match(cleaned)
    if numeric_short:
        return _parse_numeric(numeric_short, preference, short_year=True)

    return _parse_general(cleaned, preference, locale)


def parse_date_any_locale(
    text: str,
    preference: DateFormatPreference = DateFormatPreference.US,
    primary: Union[LocaleConfig, str, None] = None,
    registry: Optional[LocaleRegistry] = None,
) -> Optional[ParseResult]:
    """Parse with the primary locale, then every other registered locale.

    Returns the first successful result in registry order, or None.
    """
    registry = registry or get_locale_registry()
    if not isinstance(primary, LocaleConfig):
        primary = registry.lookup(primary)

    result = parse_date(text, preference, primary)
    if result is not None:
        return result

    for locale in registry:
        if locale is primary:
            continue
        result = parse_date(text, preference, locale)
        if result is not None:
            logger.debug(f"Parsed {text!r} with fallback locale {locale.code}")
            return result

    return None
