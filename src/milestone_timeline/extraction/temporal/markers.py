"""Milestone extraction from markdown notes.

This module turns one note into a set of milestone records:
- Front matter date fields (``date``, ``created``, ``due`` ...)
- Explicit tags (``#date/2024/03/15``, ``#year/1947``)
- Inline dates in any registered language (ISO, numeric, month names)
- Wiki links that name a date (``[[2024-03-15]]``, ``[[Mars 1947]]``)

Each call to ``extract`` depends only on the note text and the settings the
extractor was built with, so notes may be processed in any order or in
parallel by the caller.

Precedence on a line: tags first, then the inline catalog in order (ISO,
numeric, placeholder, per-locale month-name forms, bare years). A span taken
by an earlier match is never reused by a later pattern.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import PurePath
from typing import TYPE_CHECKING, Hashable, List, Optional, Set, Tuple

from milestone_timeline.extraction.temporal.locales import (
    BARE_YEAR_PATTERN,
    DatePattern,
    LocaleRegistry,
    get_locale_registry,
)
from milestone_timeline.extraction.temporal.models import (
    DateFormatPreference,
    Milestone,
    MilestoneOrigin,
    ParseResult,
)
from milestone_timeline.extraction.temporal.parser import (
    MAX_YEAR,
    MIN_YEAR,
    parse_date,
    parse_date_any_locale,
)
from milestone_timeline.ingestion.obsidian.normalizer import (
    MarkdownNormalizer,
    NoteDocument,
    content_excerpt,
    embed_spans,
    line_context,
    parse_heading,
)

if TYPE_CHECKING:
    from milestone_timeline.configuration.settings import TimelineSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Patterns and Header Fields
# ---------------------------------------------------------------------------

TAG_DATE_PATTERN = re.compile(r"#date/(\d{4})/(\d{2})/(\d{2})\b")
YEAR_TAG_PATTERN = re.compile(r"#year/(1\d{3}|20\d{2}|2100)\b")

# Checked in this order; the first field to produce a date owns it
HEADER_DATE_FIELDS = ("date", "created", "modified", "milestone", "deadline", "due")

DATE_FORMAT_FIELD = "dateformat"
DATE_UNCERTAIN_FIELD = "dateuncertain"

DATE_FORMAT_VALUES = {
    "us": DateFormatPreference.US,
    "m/d/yyyy": DateFormatPreference.US,
    "mdy": DateFormatPreference.US,
    "international": DateFormatPreference.INTERNATIONAL,
    "d/m/yyyy": DateFormatPreference.INTERNATIONAL,
    "dmy": DateFormatPreference.INTERNATIONAL,
}
UNCERTAIN_VALUES = {"true", "yes"}

Span = Tuple[int, int]


def _overlaps(start: int, end: int, spans: List[Span]) -> bool:
    return any(start < other_end and end > other_start for other_start, other_end in spans)


@dataclass
class _ScanState:
    """Per-document bookkeeping; never shared between documents."""

    document: str
    title: str
    preference: DateFormatPreference
    note_uncertain: bool = False
    milestones: List[Milestone] = field(default_factory=list)
    header_dates: Set[date] = field(default_factory=set)
    seen: Set[Hashable] = field(default_factory=set)

    def add(self, key: Hashable, milestone: Milestone) -> bool:
        if key in self.seen:
            return False
        self.seen.add(key)
        self.milestones.append(milestone)
        return True


# ---------------------------------------------------------------------------
# Extractor
# ---------------------------------------------------------------------------


class MilestoneExtractor:
    """Extract milestones from note text.

    The extractor holds only immutable configuration: the settings snapshot,
    the locale registry and the pattern catalog derived from them.

    Example:
        >>> extractor = MilestoneExtractor(TimelineSettings(language="fr"))
        >>> extractor.extract("Le 12 Avril 1956 ...", "letters/1956.md")
    """

    def __init__(
        self,
        settings: Optional["TimelineSettings"] = None,
        registry: Optional[LocaleRegistry] = None,
    ):
        if settings is None:
            from milestone_timeline.configuration.settings import TimelineSettings

            settings = TimelineSettings()
        self.settings = settings
        self.registry = registry or get_locale_registry()
        self.locale = self.registry.lookup(settings.language)
        self.normalizer = MarkdownNormalizer()

        patterns = list(self.registry.patterns)
        if settings.include_year_only:
            patterns.append(DatePattern("year_only", BARE_YEAR_PATTERN))
        self.patterns: Tuple[DatePattern, ...] = tuple(patterns)

    def extract(
        self,
        text: str,
        document: str,
        title: Optional[str] = None,
    ) -> List[Milestone]:
        """Extract every milestone in a note.

        Args:
            text: Raw note text
            document: Document identity (usually the vault-relative path)
            title: Display title (defaults to the file stem of ``document``)

        Returns:
            Milestones in discovery order, free of duplicates. Order carries
            no meaning; sort with ``milestone_timeline.timeline``.
        """
        note = self.normalizer.normalize(text)
        state = _ScanState(
            document=document,
            title=title or PurePath(document).stem,
            preference=self.settings.date_format,
        )

        self._read_overrides(state, note)
        self._extract_header(state, note)
        self._extract_body(state, note)
        self._extract_links(state, note)

        logger.debug(f"{document}: {len(state.milestones)} milestones")
        return state.milestones

    # -----------------------------------------------------------------------
    # Private: Front Matter
    # -----------------------------------------------------------------------

    def _read_overrides(self, state: _ScanState, note: NoteDocument) -> None:
        front = note.front_matter

        date_format = front.get(DATE_FORMAT_FIELD)
        if date_format is not None:
            override = DATE_FORMAT_VALUES.get(date_format.strip().lower())
            if override is not None:
                state.preference = override
            else:
                logger.debug(f"{state.document}: unknown dateFormat {date_format!r} ignored")

        uncertain = front.get(DATE_UNCERTAIN_FIELD)
        if uncertain is not None:
            state.note_uncertain = uncertain.strip().lower() in UNCERTAIN_VALUES

    def _extract_header(self, state: _ScanState, note: NoteDocument) -> None:
        front = note.front_matter
        if not front.fields:
            return

        excerpt: Optional[str] = None
        for field_name in HEADER_DATE_FIELDS:
            value = front.get(field_name)
            if not value:
                continue

            result = parse_date_any_locale(
                value, state.preference, self.locale, self.registry
            )
            if result is None:
                logger.debug(f"{state.document}: header {field_name}={value!r} is not a date")
                continue
            if result.date in state.header_dates:
                continue

            if excerpt is None:
                excerpt = content_excerpt(note.body)
            state.header_dates.add(result.date)
            state.add(
                (result.date, MilestoneOrigin.HEADER),
                Milestone(
                    date=result.date,
                    document=state.document,
                    title=state.title,
                    context=excerpt,
                    origin=MilestoneOrigin.HEADER,
                    line_number=front.field_lines.get(field_name),
                    is_uncertain=state.note_uncertain or result.is_partial,
                    source_text=value,
                ),
            )

    # -----------------------------------------------------------------------
    # Private: Body
    # -----------------------------------------------------------------------

    def _extract_body(self, state: _ScanState, note: NoteDocument) -> None:
        heading: Optional[str] = None
        for index, line in enumerate(note.body_lines):
            new_heading = parse_heading(line)
            if new_heading is not None:
                heading = new_heading
                continue
            if not line.strip():
                continue
            self._scan_line(state, line, note.line_number(index), heading)

    def _scan_line(
        self,
        state: _ScanState,
        line: str,
        line_number: int,
        heading: Optional[str],
    ) -> None:
        # Date links are handled by the link scan
        claimed: List[Span] = [m.span() for m in self.registry.link_re.finditer(line)]
        context = line_context(line)

        if self.settings.include_tag_dates:
            self._scan_tags(state, line, line_number, heading, context, claimed)

        embeds = embed_spans(line) if self.settings.exclude_screenshots else []

        for pattern in self.patterns:
            for match in pattern.regex.finditer(line):
                start, end = match.span()
                if _overlaps(start, end, claimed):
                    continue
                if any(embed_start <= start < embed_end for embed_start, embed_end in embeds):
                    logger.debug(f"{state.document}:{line_number}: date inside embed skipped")
                    continue

                candidate = match.group(1)
                result = self._parse_candidate(candidate, pattern, state.preference)
                if result is None:
                    continue

                claimed.append((start, end))
                if result.date in state.header_dates:
                    continue

                state.add(
                    (result.date, line_number, context),
                    Milestone(
                        date=result.date,
                        document=state.document,
                        title=state.title,
                        context=context,
                        origin=MilestoneOrigin.INLINE,
                        heading=heading,
                        line_number=line_number,
                        is_uncertain=result.is_partial,
                        source_text=candidate,
                    ),
                )

    def _scan_tags(
        self,
        state: _ScanState,
        line: str,
        line_number: int,
        heading: Optional[str],
        context: str,
        claimed: List[Span],
    ) -> None:
        for match in TAG_DATE_PATTERN.finditer(line):
            claimed.append(match.span())
            year, month, day = match.groups()
            result = parse_date(f"{year}-{month}-{day}", state.preference, self.locale)
            if result is None or result.date in state.header_dates:
                continue
            state.add(
                (result.date, line_number, "tag", match.group(0)),
                self._tag_milestone(state, result, match.group(0), line_number, heading, context),
            )

        for match in YEAR_TAG_PATTERN.finditer(line):
            claimed.append(match.span())
            year = int(match.group(1))
            if not MIN_YEAR <= year <= MAX_YEAR:
                continue
            # January 1 stands in for the whole year; always uncertain
            result = ParseResult(date(year, 1, 1), is_partial=True)
            if result.date in state.header_dates:
                continue
            state.add(
                (result.date, line_number, "yeartag", year),
                self._tag_milestone(state, result, match.group(0), line_number, heading, context),
            )

    def _tag_milestone(
        self,
        state: _ScanState,
        result: ParseResult,
        source_text: str,
        line_number: int,
        heading: Optional[str],
        context: str,
    ) -> Milestone:
        return Milestone(
            date=result.date,
            document=state.document,
            title=state.title,
            context=context,
            origin=MilestoneOrigin.TAG,
            heading=heading,
            line_number=line_number,
            is_uncertain=result.is_partial,
            is_tag=True,
            source_text=source_text,
        )

    def _parse_candidate(
        self,
        candidate: str,
        pattern: DatePattern,
        preference: DateFormatPreference,
    ) -> Optional[ParseResult]:
        if pattern.locale is not None:
            result = parse_date(candidate, preference, pattern.locale)
        else:
            result = parse_date_any_locale(candidate, preference, self.locale, self.registry)
        if result is None:
            logger.debug(f"{pattern.name} match {candidate!r} did not parse")
        return result

    # -----------------------------------------------------------------------
    # Private: Wiki Links
    # -----------------------------------------------------------------------

    def _extract_links(self, state: _ScanState, note: NoteDocument) -> None:
        for match in self.registry.link_re.finditer(note.body):
            candidate = match.group(1)
            result = parse_date_any_locale(
                candidate, state.preference, self.locale, self.registry
            )
            if result is None or result.date in state.header_dates:
                continue

            body_index = note.body.count("\n", 0, match.start())
            state.add(
                (result.date, MilestoneOrigin.LINK, candidate),
                Milestone(
                    date=result.date,
                    document=state.document,
                    title=state.title,
                    context=f"Wiki link: [[{candidate}]]",
                    origin=MilestoneOrigin.LINK,
                    line_number=note.line_number(body_index),
                    is_uncertain=result.is_partial,
                    source_text=candidate,
                ),
            )


def extract_milestones(
    text: str,
    document: str,
    settings: Optional["TimelineSettings"] = None,
    title: Optional[str] = None,
) -> List[Milestone]:
    """Convenience wrapper: build an extractor and scan one note."""
    return MilestoneExtractor(settings).extract(text, document, title=title)
