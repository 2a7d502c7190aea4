"""Bare year references for manual curation.

``scan_for_bare_years`` flags isolated 4-digit numbers (1000-2100) that do
not sit next to recognizable date structure. It is a heuristic: the results
are meant for a human to review and, where appropriate, to mark with an
explicit ``#year/YYYY`` tag via ``annotate_year``.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from milestone_timeline.errors import AnnotationError
from milestone_timeline.extraction.temporal.locales import (
    BARE_YEAR_PATTERN,
    LocaleRegistry,
    get_locale_registry,
)
from milestone_timeline.extraction.temporal.models import YearCandidate
from milestone_timeline.extraction.temporal.parser import MAX_YEAR, MIN_YEAR
from milestone_timeline.ingestion.obsidian.normalizer import MarkdownNormalizer

logger = logging.getLogger(__name__)

# Characters inspected on each side of a year
CONTEXT_WINDOW = 20

# Long lines are shown centred on the year
MAX_CONTEXT_LENGTH = 80
CONTEXT_RADIUS = 40

ISO_NEARBY = re.compile(r"\d{4}-\d{1,2}(?:-\d{1,2})?")
NUMERIC_NEARBY = re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}")
TAG_NEARBY = re.compile(r"#(?:date|year)/")
PLACEHOLDER_NEARBY = re.compile(
    r"(?:dd|mm)[-/]\d{1,2}[-/]\d{2,4}|\d{1,2}[-/](?:dd|mm)[-/]\d{2,4}", re.IGNORECASE
)


def _is_structured(surrounding: str, registry: LocaleRegistry) -> bool:
    """True when the window around a year looks like part of a real date."""
    checks = (
        ISO_NEARBY,
        NUMERIC_NEARBY,
        registry.month_mention_re,
        registry.ordinal_marker_re,
        TAG_NEARBY,
        PLACEHOLDER_NEARBY,
    )
    return any(check.search(surrounding) for check in checks)


def _year_context(line: str, position: int) -> str:
    context = line.strip()
    if len(context) <= MAX_CONTEXT_LENGTH:
        return context
    start = max(0, position - CONTEXT_RADIUS)
    end = min(len(line), position + CONTEXT_RADIUS)
    prefix = "..." if start > 0 else ""
    suffix = "..." if end < len(line) else ""
    return f"{prefix}{line[start:end].strip()}{suffix}"


def scan_for_bare_years(
    text: str,
    document: Optional[str] = None,
    registry: Optional[LocaleRegistry] = None,
) -> List[YearCandidate]:
    """Find year-like numbers that are not part of a structured date.

    Front matter and ``%% comments %%`` are skipped. Line numbers are 1-based
    and refer to the full note text.

    Args:
        text: Raw note text
        document: Document identity copied onto each candidate
        registry: Locale registry supplying month names and ordinal markers

    Returns:
        Candidates in reading order
    """
    registry = registry or get_locale_registry()
    note = MarkdownNormalizer().normalize(text)

    candidates: List[YearCandidate] = []
    for index, line in enumerate(note.body_lines):
        for match in BARE_YEAR_PATTERN.finditer(line):
            start, end = match.span(1)
            surrounding = line[max(0, start - CONTEXT_WINDOW): end + CONTEXT_WINDOW]
            if _is_structured(surrounding, registry):
                continue
            candidates.append(
                YearCandidate(
                    year=int(match.group(1)),
                    line_number=note.line_number(index),
                    context=_year_context(line, start),
                    document=document,
                )
            )

    logger.debug(f"{document or '<text>'}: {len(candidates)} bare year candidates")
    return candidates


def annotate_year(text: str, line_number: int, year: int) -> str:
    """Insert ``#year/YYYY`` right after the first bare occurrence of ``year``.

    Occurrences inside ISO or numeric dates, tags and wiki links are skipped,
    so the tag always lands on the occurrence the scanner reports.

    Args:
        text: Full note text
        line_number: 1-based line holding the year
        year: Year to tag

    Returns:
        The updated note text. Already tagged lines are returned unchanged.

    Raises:
        AnnotationError: When the year is out of range, the line does not
            exist, or the year does not appear on it
    """
    details = {"line_number": line_number, "year": year}
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise AnnotationError(f"Year {year} is outside {MIN_YEAR}-{MAX_YEAR}", details=details)

    lines = text.split("\n")
    if not 1 <= line_number <= len(lines):
        raise AnnotationError(
            f"Line {line_number} is out of range (1-{len(lines)})", details=details
        )

    tag = f"#year/{year}"
    line = lines[line_number - 1]
    if re.search(rf"{re.escape(tag)}(?!\d)", line):
        return text

    # Only bare occurrences, as reported by the scanner
    match = next(
        (m for m in BARE_YEAR_PATTERN.finditer(line) if m.group(1) == str(year)), None
    )
    if match is None:
        raise AnnotationError(f"Year {year} not found on line {line_number}", details=details)

    lines[line_number - 1] = f"{line[:match.end()]} {tag}{line[match.end():]}"
    return "\n".join(lines)
