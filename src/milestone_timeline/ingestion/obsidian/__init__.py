"""Obsidian vault utilities.

- normalizer: front matter, comments, headings and embeds
- vault: markdown file discovery and per-note extraction

``vault`` is imported explicitly by callers; it depends on the extraction
package, which in turn uses ``normalizer``.
"""

from .normalizer import (
    FrontMatter,
    FrontmatterParser,
    MarkdownNormalizer,
    NoteDocument,
    blank_comments,
    content_excerpt,
)

__all__ = [
    "FrontMatter",
    "FrontmatterParser",
    "MarkdownNormalizer",
    "NoteDocument",
    "blank_comments",
    "content_excerpt",
]
