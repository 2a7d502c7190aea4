"""Presentation helpers for extracted milestones.

Ordering, year/month banding, display dates and search live here, outside
the extraction engine, which only returns unordered milestone sets.
"""

from .layout import (
    TimelineRow,
    TimelineRowKind,
    build_timeline,
    format_milestone_date,
    sort_milestones,
)
from .search import filter_milestones, fuzzy_match

__all__ = [
    "TimelineRow",
    "TimelineRowKind",
    "build_timeline",
    "format_milestone_date",
    "sort_milestones",
    "filter_milestones",
    "fuzzy_match",
]
