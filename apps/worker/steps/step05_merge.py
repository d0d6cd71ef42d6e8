"""
Step 5: Complementary note merge.
Related-but-not-duplicate notes about the same POD / date are folded together.
"""
from __future__ import annotations

import logging
from typing import Sequence

from packages.shared.models import AnalyzedNote, DecisionCode, Marker, MarkerType, Warning
from apps.worker.lib.sentence_split import join_sentences
from apps.worker.lib.similarity import SimilarityScorer
from apps.worker.lib.text_normalize import TextNormalizer
from apps.worker.steps.note_analyzer import build_signature

logger = logging.getLogger(__name__)

# Half-open band [low, high): below is unrelated, at or above was handled as a duplicate.
MERGE_BAND_LOW = 0.3
MERGE_BAND_HIGH = 0.6
MERGE_PRIORITY_BONUS = 5


def in_merge_band(similarity: float) -> bool:
    return MERGE_BAND_LOW <= similarity < MERGE_BAND_HIGH


def share_temporal_context(a: Sequence[Marker], b: Sequence[Marker]) -> bool:
    """Matching POD wins; otherwise matching date string; markerless never matches."""
    if not a or not b:
        return False

    pods_a = {m.value for m in a if m.type == MarkerType.POD}
    pods_b = {m.value for m in b if m.type == MarkerType.POD}
    if pods_a and pods_b:
        return bool(pods_a & pods_b)

    dates_a = {m.value for m in a if m.type == MarkerType.DATE}
    dates_b = {m.value for m in b if m.type == MarkerType.DATE}
    if dates_a and dates_b:
        return bool(dates_a & dates_b)

    return False


def merge_notes(a: AnalyzedNote, b: AnalyzedNote, normalizer: TextNormalizer | None = None) -> AnalyzedNote:
    """Fold b into a. Returns a new note; neither input changes."""
    normalizer = normalizer or TextNormalizer()
    seen: set[str] = set()
    sentences: list[str] = []
    for sentence in (*a.sentences, *b.sentences):
        key = normalizer.normalize(sentence)
        if key in seen:
            continue
        seen.add(key)
        sentences.append(sentence)

    content = join_sentences(sentences)
    normalized = normalizer.normalize(content)
    markers = sorted((*a.temporal_markers, *b.temporal_markers), key=lambda m: m.position)
    return AnalyzedNote(
        content=content,
        normalized_content=normalized,
        sentences=tuple(sentences),
        word_count=len(normalized.split()),
        temporal_markers=tuple(markers),
        entities=a.entities.union(b.entities),
        signature=build_signature(normalized),
        priority=max(a.priority, b.priority) + MERGE_PRIORITY_BONUS,
    )


def merge_complementary_notes(
    notes: list[AnalyzedNote],
    scorer: SimilarityScorer | None = None,
    normalizer: TextNormalizer | None = None,
) -> tuple[list[AnalyzedNote], int, list[Warning]]:
    scorer = scorer or SimilarityScorer()
    normalizer = normalizer or TextNormalizer()
    warnings: list[Warning] = []
    if len(notes) < 2:
        return list(notes), 0, warnings

    consumed: set[int] = set()
    merged: list[AnalyzedNote] = []
    merge_count = 0

    for i in range(len(notes)):
        if i in consumed:
            continue
        current = notes[i]
        for j in range(i + 1, len(notes)):
            if j in consumed:
                continue
            candidate = notes[j]
            similarity = scorer.score(current.signature, candidate.signature)
            if not in_merge_band(similarity):
                continue
            if not share_temporal_context(current.temporal_markers, candidate.temporal_markers):
                continue
            current = merge_notes(current, candidate, normalizer)
            consumed.add(j)
            merge_count += 1
            logger.debug(f"Merged note {j} into note {i} (similarity {similarity:.3f})")
            warnings.append(Warning(
                code=DecisionCode.COMPLEMENTARY_MERGE,
                message=f"Note {j} merged into note {i} (similarity {similarity:.2f}, shared temporal context)",
                note_index=j,
            ))
        merged.append(current)
        consumed.add(i)

    return merged, merge_count, warnings
