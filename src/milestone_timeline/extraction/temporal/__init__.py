"""Multi-locale date recognition for markdown notes.

This package implements:
- Locale tables for English, Spanish, French and Japanese month names
- Date parsing with partial-date defaults and locale fallback
- Milestone extraction from front matter, inline text, tags and wiki links
- Bare year scanning for manual curation

Example:
    >>> from milestone_timeline.extraction.temporal import MilestoneExtractor
    >>> extractor = MilestoneExtractor()
    >>> milestones = extractor.extract(text, "notes/letter.md")
"""

from milestone_timeline.extraction.temporal.models import (
    # Enums
    DateFormatPreference,
    MilestoneOrigin,
    # Core data structures
    Milestone,
    ParseResult,
    YearCandidate,
)
from milestone_timeline.extraction.temporal.locales import (
    DEFAULT_LANGUAGE,
    DatePattern,
    LocaleConfig,
    LocaleRegistry,
    get_locale_registry,
)
from milestone_timeline.extraction.temporal.parser import (
    MAX_YEAR,
    MIN_YEAR,
    parse_date,
    parse_date_any_locale,
)
from milestone_timeline.extraction.temporal.markers import (
    MilestoneExtractor,
    extract_milestones,
)
from milestone_timeline.extraction.temporal.years import (
    annotate_year,
    scan_for_bare_years,
)

__all__ = [
    # Models
    "DateFormatPreference",
    "MilestoneOrigin",
    "Milestone",
    "ParseResult",
    "YearCandidate",
    # Locales
    "DEFAULT_LANGUAGE",
    "DatePattern",
    "LocaleConfig",
    "LocaleRegistry",
    "get_locale_registry",
    # Parsing
    "MAX_YEAR",
    "MIN_YEAR",
    "parse_date",
    "parse_date_any_locale",
    # Extraction
    "MilestoneExtractor",
    "extract_milestones",
    # Year references
    "annotate_year",
    "scan_for_bare_years",
]
