"""Unit tests for the bare-year scanner and year annotation."""

from __future__ import annotations

from datetime import date

import pytest

from milestone_timeline.errors import AnnotationError
from milestone_timeline.extraction.temporal.models import MilestoneOrigin
from milestone_timeline.extraction.temporal.years import annotate_year, scan_for_bare_years


def _years(text):
    return [c.year for c in scan_for_bare_years(text)]


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


class TestScanForBareYears:
    """Tests for scan_for_bare_years."""

    def test_isolated_year_reported(self):
        candidates = scan_for_bare_years("Room 1945 was empty", document="notes/a.md")

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.year == 1945
        assert candidate.line_number == 1
        assert candidate.context == "Room 1945 was empty"
        assert candidate.document == "notes/a.md"

    @pytest.mark.parametrize(
        "line",
        [
            "We left in May 1945.",
            "Nous sommes partis en Mai 1945.",
            "Salimos en Agosto 1945.",
            "手紙 8月 1945 です",
            "On the 3rd in 1945",
            "Le 1er jour de 1945",
            "Project 1999 ends 2024-03-15",
            "Project 1999 ends 3/15/2024",
            "Tagged 1945 #year/1945",
            "Draft 1985 was dated dd/05/1985",
        ],
    )
    def test_structured_neighbourhood_excluded(self, line):
        assert _years(line) == []

    @pytest.mark.parametrize(
        "line",
        ["2024-03-15", "3/15/1947", "#year/1945", "See [[1945]]", "ID 123456", "v2.1945-rc"],
    )
    def test_year_inside_structure_not_matched(self, line):
        assert _years(line) == []

    def test_year_bounds(self):
        assert _years("Years 1000 and 2100") == [1000, 2100]
        assert _years("Years 2500 and 0999") == []

    def test_front_matter_skipped(self):
        text = "---\nyear: 1999\n---\nBuilt 1887 by hand\n"
        candidates = scan_for_bare_years(text)

        assert [c.year for c in candidates] == [1887]
        assert candidates[0].line_number == 4

    def test_comments_skipped(self):
        assert _years("Visible 1887 %% hidden 1901 %%") == [1887]

    def test_long_line_context_centred(self):
        line = "filler " * 20 + "1887" + " filler" * 20
        context = scan_for_bare_years(line)[0].context

        assert context.startswith("...")
        assert context.endswith("...")
        assert "1887" in context
        assert len(context) < len(line)

    def test_reading_order(self):
        text = "Room 1945\nsecond line\nBuilt 1887\n"
        candidates = scan_for_bare_years(text)
        assert [(c.year, c.line_number) for c in candidates] == [(1945, 1), (1887, 3)]


# ---------------------------------------------------------------------------
# Annotation
# ---------------------------------------------------------------------------


class TestAnnotateYear:
    """Tests for annotate_year."""

    def test_tag_inserted_after_year(self):
        text = "Intro\nRoom 1945 was empty\n"
        assert annotate_year(text, 2, 1945) == "Intro\nRoom 1945 #year/1945 was empty\n"

    def test_already_tagged_is_unchanged(self):
        text = annotate_year("Room 1945 was empty", 1, 1945)
        assert annotate_year(text, 1, 1945) == text

    def test_skips_year_inside_date(self):
        text = "3/15/1945 and 1945"
        assert annotate_year(text, 1, 1945) == "3/15/1945 and 1945 #year/1945"

    def test_skips_year_inside_iso_date(self, extractor):
        text = "Moved on 2024-03-15 to the coast, and much later in 2024 we left"
        assert [(c.year, c.line_number) for c in scan_for_bare_years(text)] == [(2024, 1)]

        annotated = annotate_year(text, 1, 2024)

        assert annotated == (
            "Moved on 2024-03-15 to the coast, and much later in 2024 #year/2024 we left"
        )
        milestones = sorted(extractor.extract(annotated, "a.md"), key=lambda m: m.date)
        assert [(m.date, m.origin) for m in milestones] == [
            (date(2024, 1, 1), MilestoneOrigin.TAG),
            (date(2024, 3, 15), MilestoneOrigin.INLINE),
        ]

    def test_skips_year_inside_wiki_link(self):
        text = "See [[2024]] and 2024"
        assert annotate_year(text, 1, 2024) == "See [[2024]] and 2024 #year/2024"

    def test_annotated_year_becomes_tag_milestone(self, extractor):
        text = annotate_year("Room 1945 was empty", 1, 1945)

        assert scan_for_bare_years(text) == []
        milestones = extractor.extract(text, "a.md")
        assert len(milestones) == 1
        assert milestones[0].origin == MilestoneOrigin.TAG
        assert milestones[0].date == date(1945, 1, 1)

    @pytest.mark.parametrize(
        "line_number,year",
        [(1, 999), (1, 2101), (0, 1945), (3, 1945), (1, 1946)],
    )
    def test_rejected(self, line_number, year):
        with pytest.raises(AnnotationError) as exc_info:
            annotate_year("Room 1945\nsecond", line_number, year)

        assert exc_info.value.code == "ANNOTATION_ERROR"
        assert exc_info.value.details == {"line_number": line_number, "year": year}
