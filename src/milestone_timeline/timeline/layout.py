"""Timeline ordering and banding.

A timeline is a flat list of rows: a year marker whenever the year changes,
a month marker whenever the month changes inside a busy year, and one row
per milestone.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from milestone_timeline.configuration.settings import TimelineSettings
from milestone_timeline.extraction.temporal.locales import LocaleConfig, get_locale_registry
from milestone_timeline.extraction.temporal.models import Milestone


class TimelineRowKind(str, Enum):
    YEAR = "year"
    MONTH = "month"
    MILESTONE = "milestone"


@dataclass(frozen=True)
class TimelineRow:
    kind: TimelineRowKind
    label: str
    year: int
    month: Optional[int] = None
    milestone: Optional[Milestone] = None


def sort_milestones(milestones: Iterable[Milestone], order: str = "asc") -> List[Milestone]:
    """Sort by date, then document and line so equal dates stay stable."""
    return sorted(
        milestones,
        key=lambda m: (m.date, m.document, m.line_number or 0),
        reverse=order == "desc",
    )


def format_milestone_date(milestone: Milestone, locale: Optional[LocaleConfig] = None) -> str:
    """Display date that hides defaulted parts of partial dates.

    Uncertain July 1 (year only) and uncertain January 1 year tags show just
    the year; an uncertain 15th shows "<Month> <year>" in the display locale.
    Everything else is ISO ``YYYY-MM-DD``.
    """
    locale = locale or get_locale_registry().default
    value = milestone.date
    if milestone.is_uncertain:
        if (value.month, value.day) == (7, 1):
            return str(value.year)
        if milestone.is_tag and (value.month, value.day) == (1, 1):
            return str(value.year)
        if value.day == 15:
            return f"{locale.month_name(value.month)} {value.year}"
    return value.isoformat()


def build_timeline(
    milestones: Iterable[Milestone],
    settings: Optional[TimelineSettings] = None,
    locale: Optional[LocaleConfig] = None,
) -> List[TimelineRow]:
    """Sort milestones and interleave year and month marker rows.

    Month markers appear only in years with at least ``month_threshold``
    milestones. Year markers are dropped when year-only extraction is on and
    ``show_year_markers_with_year_only`` is off.
    """
    settings = settings or TimelineSettings()
    locale = locale or get_locale_registry().lookup(settings.language)
    ordered = sort_milestones(milestones, settings.sort_order)

    per_year = Counter(m.date.year for m in ordered)
    show_years = not settings.include_year_only or settings.show_year_markers_with_year_only

    rows: List[TimelineRow] = []
    previous_year: Optional[int] = None
    previous_month: Optional[int] = None
    for milestone in ordered:
        year, month = milestone.date.year, milestone.date.month

        if year != previous_year:
            if show_years:
                rows.append(TimelineRow(TimelineRowKind.YEAR, str(year), year))
            previous_month = None

        if per_year[year] >= settings.month_threshold and month != previous_month:
            rows.append(
                TimelineRow(TimelineRowKind.MONTH, locale.month_name(month), year, month)
            )

        rows.append(
            TimelineRow(
                TimelineRowKind.MILESTONE,
                format_milestone_date(milestone, locale),
                year,
                month,
                milestone,
            )
        )
        previous_year, previous_month = year, month

    return rows
