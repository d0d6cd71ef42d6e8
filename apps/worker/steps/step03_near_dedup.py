"""
Step 3: Near-duplicate collapse.

Greedy left-to-right scan over a growing kept list. A candidate is compared
to kept notes in kept order; the first kept note at or above the threshold
is its match, the higher-priority note of the pair survives in that slot and
scanning stops. This is not transitive clustering: A~B and B~C does not put
A and C together.
"""
from __future__ import annotations

import logging

from packages.shared.models import AnalyzedNote, DecisionCode, Warning
from apps.worker.lib.similarity import SimilarityScorer

logger = logging.getLogger(__name__)


def collapse_near_duplicates(
    notes: list[AnalyzedNote],
    threshold: float,
    scorer: SimilarityScorer | None = None,
) -> tuple[list[AnalyzedNote], list[Warning]]:
    scorer = scorer or SimilarityScorer()
    warnings: list[Warning] = []
    kept: list[AnalyzedNote] = []

    for idx, candidate in enumerate(notes):
        match_slot = None
        similarity = 0.0
        for slot, kept_note in enumerate(kept):
            # No significant vocabulary on one side means nothing to compare.
            if not candidate.signature or not kept_note.signature:
                continue
            similarity = scorer.score(candidate.signature, kept_note.signature)
            if similarity >= threshold:
                match_slot = slot
                break

        if match_slot is None:
            kept.append(candidate)
            continue

        incumbent = kept[match_slot]
        if candidate.priority > incumbent.priority:
            kept[match_slot] = candidate
            outcome = "replaced kept note"
        else:
            outcome = "dropped"
        logger.debug(f"Near duplicate: note {idx} vs kept slot {match_slot} sim={similarity:.3f} -> {outcome}")
        warnings.append(Warning(
            code=DecisionCode.NEAR_DUPLICATE,
            message=(
                f"Note {idx} matched kept slot {match_slot} (similarity {similarity:.2f}); "
                f"candidate {outcome} (priority {candidate.priority:.1f} vs {incumbent.priority:.1f})"
            ),
            note_index=idx,
        ))

    return kept, warnings
