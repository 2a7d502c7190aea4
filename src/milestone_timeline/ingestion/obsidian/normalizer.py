"""Obsidian markdown structure needed by milestone extraction.

Splits a note into its front matter and body, blanks ``%% comment %%``
regions without moving any line, and recognizes headings, embeds and wiki
links. Nothing here interprets dates; that is the extractor's job.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

NO_PREVIEW = "No content preview available"
ELLIPSIS = "..."
BOM = "\ufeff"


@dataclass
class FrontMatter:
    """Parsed front matter block.

    ``fields`` holds lowercased keys with string values only; list and
    mapping values are dropped. ``field_lines`` maps each top-level key to the
    1-based line it is declared on. ``body_start`` is the 0-based index of the
    first line after the closing fence (0 when there is no block).
    """

    fields: Dict[str, str] = field(default_factory=dict)
    field_lines: Dict[str, int] = field(default_factory=dict)
    body_start: int = 0
    raw: Optional[str] = None
    error: Optional[str] = None

    @property
    def present(self) -> bool:
        return self.raw is not None

    def get(self, key: str) -> Optional[str]:
        return self.fields.get(key.lower())


class FrontmatterParser:
    """YAML front matter parser that never fails the document.

    The block must open on the first line with ``---`` and is closed by the
    next ``---`` line. Scalars are loaded with ``BaseLoader`` so dates stay the
    exact text the author wrote.
    """

    FENCE = "---"
    KEY_PATTERN = re.compile(r'^["\']?([A-Za-z_][\w-]*)["\']?\s*:')

    def parse(self, content: str) -> FrontMatter:
        lines = content.split("\n")
        if not lines or lines[0].rstrip() != self.FENCE:
            return FrontMatter()

        closing = None
        for index in range(1, len(lines)):
            if lines[index].rstrip() == self.FENCE:
                closing = index
                break
        if closing is None:
            logger.debug("Front matter fence is never closed; treating note as body only")
            return FrontMatter()

        raw = "\n".join(lines[1:closing])
        front = FrontMatter(body_start=closing + 1, raw=raw)
        front.field_lines = self._field_lines(lines[1:closing])

        try:
            parsed = yaml.load(raw, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            logger.warning(f"Malformed front matter, reading fields line by line: {e}")
            front.error = str(e)
            front.fields = self._line_fields(lines[1:closing])
            return front

        if parsed is None:
            return front
        if not isinstance(parsed, dict):
            logger.warning(f"Front matter is not a mapping ({type(parsed).__name__}); ignored")
            front.error = "front matter is not a mapping"
            return front

        front.fields = self._normalize(parsed)
        return front

    def _field_lines(self, header_lines: List[str]) -> Dict[str, int]:
        field_lines: Dict[str, int] = {}
        for offset, line in enumerate(header_lines):
            match = self.KEY_PATTERN.match(line)
            if match:
                # +2: one for the opening fence, one for 1-based numbering
                field_lines.setdefault(match.group(1).lower(), offset + 2)
        return field_lines

    def _line_fields(self, header_lines: List[str]) -> Dict[str, str]:
        """Top-level ``key: value`` lines, for blocks YAML cannot load."""
        fields: Dict[str, str] = {}
        for line in header_lines:
            match = self.KEY_PATTERN.match(line)
            if not match:
                continue
            value = strip_quotes(line[match.end():])
            if value:
                fields.setdefault(match.group(1).lower(), value)
        return fields

    def _normalize(self, parsed: Dict[Any, Any]) -> Dict[str, str]:
        normalized: Dict[str, str] = {}
        for key, value in parsed.items():
            if not isinstance(key, str) or not isinstance(value, str):
                continue
            normalized.setdefault(key.lower(), strip_quotes(value))
        return normalized


# ---------------------------------------------------------------------------
# Inline Syntax
# ---------------------------------------------------------------------------

COMMENT_PATTERN = re.compile(r"%%.*?%%", re.DOTALL)
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$")
HORIZONTAL_RULE_PATTERN = re.compile(r"^[-*_]{3,}$")
WIKI_EMBED_PATTERN = re.compile(r"!\[\[[^\]]*\]\]")
IMAGE_EMBED_PATTERN = re.compile(r"!\[[^\]]*\]\([^)]*\)")
LINK_ONLY_PATTERN = re.compile(r"^!?\[\[.*\]\]$")


def strip_quotes(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1].strip()
    return value


def blank_comments(text: str) -> str:
    """Replace ``%% ... %%`` regions with spaces, keeping every newline.

    Line numbers and column offsets are unchanged afterwards.
    """
    return COMMENT_PATTERN.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)


def parse_heading(line: str) -> Optional[str]:
    """Return heading text for a markdown heading line, else None."""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    return match.group(2).strip()


def embed_spans(line: str) -> List[Tuple[int, int]]:
    """Character spans of ``![[...]]`` and ``![alt](...)`` embeds on a line."""
    spans = [m.span() for m in WIKI_EMBED_PATTERN.finditer(line)]
    spans.extend(m.span() for m in IMAGE_EMBED_PATTERN.finditer(line))
    return spans


def truncate(text: str, max_length: int = 100) -> str:
    """Cut text to at most ``max_length`` characters, ellipsis included."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)].rstrip() + ELLIPSIS


def line_context(line: str, max_length: int = 100) -> str:
    """Display context for a body line: heading marks removed, truncated."""
    return truncate(re.sub(r"^#+\s*", "", line).strip(), max_length)


def content_excerpt(body: str, max_length: int = 100) -> str:
    """Plain-text preview of a note body.

    Skips blank lines, headings, horizontal rules and lines that hold only a
    link or embed. Lines are joined with spaces until ``max_length`` is
    reached; an ellipsis marks that the note continues.
    """
    meaningful = []
    for line in blank_comments(body).split("\n"):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if HORIZONTAL_RULE_PATTERN.match(stripped) or LINK_ONLY_PATTERN.match(stripped):
            continue
        meaningful.append(stripped)

    if not meaningful:
        return NO_PREVIEW

    excerpt = ""
    used = 0
    for stripped in meaningful:
        excerpt = f"{excerpt} {stripped}" if excerpt else stripped
        used += 1
        if len(excerpt) >= max_length:
            break

    if len(excerpt) > max_length or used < len(meaningful):
        if len(excerpt) + len(ELLIPSIS) > max_length:
            excerpt = excerpt[: max_length - len(ELLIPSIS)].rstrip()
        excerpt += ELLIPSIS
    return excerpt


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass
class NoteDocument:
    """A note split into front matter and a comment-free body.

    ``body_lines`` are the document's lines after the front matter with
    comments blanked; ``body_lines[i]`` is line ``body_offset + i + 1`` of the
    original text.
    """

    text: str
    front_matter: FrontMatter
    body: str
    body_lines: List[str]

    @property
    def body_offset(self) -> int:
        return self.front_matter.body_start

    def line_number(self, body_index: int) -> int:
        """1-based document line for a 0-based body line index."""
        return self.body_offset + body_index + 1


class MarkdownNormalizer:
    """Prepare raw note text for date extraction."""

    def __init__(self, frontmatter_parser: Optional[FrontmatterParser] = None):
        self.frontmatter_parser = frontmatter_parser or FrontmatterParser()

    def normalize(self, content: str) -> NoteDocument:
        content = content.replace("\r\n", "\n")
        if content.startswith(BOM):
            content = content[len(BOM):]
        front = self.frontmatter_parser.parse(content)
        lines = content.split("\n")
        body = blank_comments("\n".join(lines[front.body_start:]))
        return NoteDocument(
            text=content,
            front_matter=front,
            body=body,
            body_lines=body.split("\n"),
        )
