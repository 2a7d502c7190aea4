"""Forgiving milestone search."""

from __future__ import annotations

from typing import Iterable, List

from milestone_timeline.extraction.temporal.models import Milestone


def fuzzy_match(text: str, query: str) -> bool:
    """True if the query's characters appear in order in text, or as a substring.

    Both arguments are expected lowercased.
    """
    position = 0
    for char in text:
        if position == len(query):
            break
        if char == query[position]:
            position += 1
    return position == len(query) or query in text


def filter_milestones(milestones: Iterable[Milestone], query: str) -> List[Milestone]:
    """Keep milestones whose title, context, heading, date or path match."""
    query = query.strip().lower()
    if not query:
        return list(milestones)

    matched = []
    for milestone in milestones:
        fields = (
            milestone.title,
            milestone.context,
            milestone.heading or "",
            milestone.date.isoformat(),
            milestone.document,
        )
        if any(fuzzy_match(value.lower(), query) for value in fields if value):
            matched.append(milestone)
    return matched
