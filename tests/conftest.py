"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def write_note(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a UTF-8 note below ``tmp_path/vault`` and return its path."""

    root = tmp_path / "vault"

    def _write(relative: str, text: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_vault(tmp_path: Path, write_note) -> Path:
    """Small multilingual vault with one note per language and vault internals."""

    write_note(
        "letters/amelie.md",
        "---\ndate: 12 Avril 1956\n---\nChère amie,\nNous sommes arrivées le 28 Mai 1968.\n",
    )
    write_note(
        "letters/carta.md",
        "Querida,\nNació el 7 de Marzo de 1963 en Sevilla.\n",
    )
    write_note(
        "journal/2024.md",
        "# Launch\nShipped on 2024-03-15.\nRoom 1945 was empty.\n",
    )
    write_note(".obsidian/workspace.md", "Ignored 2001-01-01\n")
    write_note("attachments/readme.txt", "Not markdown 2002-02-02\n")
    return tmp_path / "vault"
