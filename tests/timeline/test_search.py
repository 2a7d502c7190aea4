"""Tests for milestone search."""

from __future__ import annotations

from datetime import date

from milestone_timeline.extraction.temporal.models import Milestone, MilestoneOrigin
from milestone_timeline.timeline import filter_milestones, fuzzy_match


def _milestone(title, context, value=date(2024, 3, 15), heading=None, document="notes/a.md"):
    return Milestone(
        date=value,
        document=document,
        title=title,
        context=context,
        origin=MilestoneOrigin.INLINE,
        heading=heading,
    )


class TestFuzzyMatch:
    """Tests for fuzzy_match."""

    def test_subsequence(self):
        assert fuzzy_match("product launch", "prdlnch")

    def test_substring(self):
        assert fuzzy_match("product launch", "launch")

    def test_out_of_order(self):
        assert not fuzzy_match("launch", "hcnual")

    def test_empty_query(self):
        assert fuzzy_match("anything", "")


class TestFilterMilestones:
    """Tests for filter_milestones."""

    def test_matches_each_field(self):
        by_title = _milestone("Wedding", "x")
        by_context = _milestone("a", "Moved to Lyon")
        by_heading = _milestone("b", "y", heading="Retro")
        by_date = _milestone("c", "z", value=date(1947, 3, 15))
        by_path = _milestone("d", "w", document="letters/amelie.md")
        milestones = [by_title, by_context, by_heading, by_date, by_path]

        assert filter_milestones(milestones, "wedding") == [by_title]
        assert filter_milestones(milestones, "LYON") == [by_context]
        assert filter_milestones(milestones, "retro") == [by_heading]
        assert filter_milestones(milestones, "1947-03") == [by_date]
        assert filter_milestones(milestones, "amelie") == [by_path]

    def test_blank_query_keeps_everything(self):
        milestones = [_milestone("a", "b"), _milestone("c", "d")]
        assert filter_milestones(milestones, "   ") == milestones

    def test_no_match(self):
        assert filter_milestones([_milestone("a", "b")], "zebra") == []
