"""Milestone extraction data models.

This module defines the data structures shared by the date parser, the
milestone extractor and the year-reference scanner:
- Numeric date format preference (month-first vs day-first)
- Parse results with a partial-date flag
- Milestone records with their origin and display context
- Bare-year candidates for manual curation
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class DateFormatPreference(str, Enum):
    """How the two leading tokens of a numeric date are read."""

    US = "US"                        # month/day/year
    INTERNATIONAL = "International"  # day/month/year


class MilestoneOrigin(str, Enum):
    """Where in a document a milestone was found."""

    HEADER = "header"  # Front matter date field
    INLINE = "inline"  # Free text in the body
    TAG = "tag"        # #date/... or #year/... tag
    LINK = "link"      # [[2024-03-15]] style wiki link


# ---------------------------------------------------------------------------
# Core Data Structures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParseResult:
    """Resolved calendar date for one candidate string.

    ``is_partial`` is set when the day and/or month were not present in the
    source text and were defaulted.
    """

    date: date
    is_partial: bool = False


@dataclass(frozen=True)
class Milestone:
    """One normalized, de-duplicated date occurrence in a document."""

    date: date
    document: str
    title: str
    context: str
    origin: MilestoneOrigin
    heading: Optional[str] = None
    line_number: Optional[int] = None
    is_uncertain: bool = False
    is_tag: bool = False
    source_text: Optional[str] = None

    @property
    def year(self) -> int:
        return self.date.year

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "date": self.date.isoformat(),
            "document": self.document,
            "title": self.title,
            "context": self.context,
            "origin": self.origin.value,
            "heading": self.heading,
            "line_number": self.line_number,
            "is_uncertain": self.is_uncertain,
            "is_tag": self.is_tag,
            "source_text": self.source_text,
        }


@dataclass(frozen=True)
class YearCandidate:
    """A bare year in body text that is not part of a structured date."""

    year: int
    line_number: int
    context: str
    document: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "year": self.year,
            "line_number": self.line_number,
            "context": self.context,
            "document": self.document,
        }
