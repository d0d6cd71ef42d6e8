"""
Step 2: Note analysis.
"""
from __future__ import annotations

from packages.shared.models import AnalyzedNote
from apps.worker.steps.note_analyzer import NoteAnalyzer


def analyze_notes(
    notes: list[str], analyzer: NoteAnalyzer | None = None, max_workers: int | None = None
) -> list[AnalyzedNote]:
    analyzer = analyzer or NoteAnalyzer()
    return analyzer.analyze_many(notes, max_workers=max_workers)
