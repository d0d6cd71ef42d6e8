"""
Step 6: Chronological ordering.
Stable sort by first temporal marker position; markerless notes go last.
"""
from __future__ import annotations

from packages.shared.models import AnalyzedNote


def _chronology_key(note: AnalyzedNote) -> tuple[int, int]:
    pos = note.first_marker_position
    if pos is None:
        return (1, 0)
    return (0, pos)


def sort_by_chronology(notes: list[AnalyzedNote]) -> list[AnalyzedNote]:
    return sorted(notes, key=_chronology_key)
