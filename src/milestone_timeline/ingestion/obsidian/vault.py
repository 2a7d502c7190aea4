"""Vault access: markdown discovery, reading and per-note extraction.

The extraction engine never touches the file system; this module walks a
vault, reads each note and hands the text over. Notes are processed one at
a time. A note that cannot be read is logged and skipped so one bad file
never aborts the collection scan.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from pathspec import PathSpec

from milestone_timeline.configuration.settings import TimelineSettings
from milestone_timeline.errors import DocumentReadError, VaultNotFoundError
from milestone_timeline.extraction.temporal.markers import MilestoneExtractor
from milestone_timeline.extraction.temporal.models import Milestone, YearCandidate
from milestone_timeline.extraction.temporal.years import scan_for_bare_years

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_PATTERNS = (".obsidian/", ".trash/", ".git/")
MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


def build_ignore_spec(patterns: Optional[Sequence[str]] = None) -> PathSpec:
    """Gitignore-style matcher of paths to skip; defaults cover vault internals."""
    lines = list(DEFAULT_IGNORE_PATTERNS)
    lines.extend(patterns or ())
    return PathSpec.from_lines("gitwildmatch", lines)


def _require_vault(root: Path) -> None:
    if not root.is_dir():
        raise VaultNotFoundError(
            f"Vault directory not found: {root}", details={"path": str(root)}
        )


def iter_markdown_files(
    root: Path,
    *,
    ignore: Optional[Sequence[str]] = None,
    follow_symlinks: bool = False,
) -> Iterator[Path]:
    """Yield markdown files under ``root`` in a stable order, honoring ignore rules."""

    _require_vault(root)
    spec = build_ignore_spec(ignore)

    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        current_dir = Path(dirpath)
        dirnames[:] = sorted(
            name
            for name in dirnames
            if not spec.match_file(f"{(current_dir / name).relative_to(root).as_posix()}/")
        )

        for filename in sorted(filenames):
            path = current_dir / filename
            if path.suffix.lower() not in MARKDOWN_SUFFIXES:
                continue
            if spec.match_file(path.relative_to(root).as_posix()):
                continue
            yield path


def read_note(path: Path) -> str:
    """Read a note as UTF-8 text."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(
            f"Could not read {path}: {exc}", details={"path": str(path)}
        ) from exc


def _notes(root: Path, ignore: Optional[Sequence[str]]) -> Iterator[tuple[str, str]]:
    for path in iter_markdown_files(root, ignore=ignore):
        try:
            text = read_note(path)
        except DocumentReadError as exc:
            logger.warning(f"Skipping unreadable note: {exc.message}")
            continue
        yield path.relative_to(root).as_posix(), text


def collect_milestones(
    root: Path,
    settings: Optional[TimelineSettings] = None,
    *,
    ignore: Optional[Sequence[str]] = None,
) -> List[Milestone]:
    """Extract milestones from every note in a vault (unsorted)."""

    extractor = MilestoneExtractor(settings or TimelineSettings())
    milestones: List[Milestone] = []
    for document, text in _notes(root, ignore):
        milestones.extend(extractor.extract(text, document))
    logger.debug(f"{root}: {len(milestones)} milestones")
    return milestones


def collect_year_candidates(
    root: Path,
    *,
    ignore: Optional[Sequence[str]] = None,
) -> List[YearCandidate]:
    """Bare year candidates for every note in a vault."""

    candidates: List[YearCandidate] = []
    for document, text in _notes(root, ignore):
        candidates.extend(scan_for_bare_years(text, document))
    return candidates
