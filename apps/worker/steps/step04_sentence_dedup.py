"""
Step 4: Corpus-wide sentence deduplication.

A registry of seen sentences (keyed by normalized text) spans every note in
survivor order; a sentence already said by an earlier note is dropped from
the later one. Sentences under MIN_SENTENCE_CHARS are dropped too, and each
note's content is rebuilt from what survives. Markers, signature and priority
stay as analyzed in step 2, so marker positions refer to the note as written.
Notes left with nothing to say are removed.
"""
from __future__ import annotations

import logging

from packages.shared.models import AnalyzedNote, DecisionCode, Warning
from apps.worker.lib.sentence_split import join_sentences
from apps.worker.lib.similarity import SimilarityScorer
from apps.worker.lib.text_normalize import TextNormalizer

logger = logging.getLogger(__name__)

MIN_SENTENCE_CHARS = 10


def _is_short(sentence: str) -> bool:
    return len(sentence) < MIN_SENTENCE_CHARS


def deduplicate_sentences(
    notes: list[AnalyzedNote],
    threshold: float,
    scorer: SimilarityScorer | None = None,
    normalizer: TextNormalizer | None = None,
) -> tuple[list[AnalyzedNote], list[Warning]]:
    scorer = scorer or SimilarityScorer()
    normalizer = normalizer or TextNormalizer()
    warnings: list[Warning] = []
    registry: dict[str, int] = {}  # normalized sentence -> index of the note that said it first
    out: list[AnalyzedNote] = []

    for idx, note in enumerate(notes):
        # Only short fragments ("A", "Stable."): nothing comparable, leave as is.
        if note.sentences and all(_is_short(s) for s in note.sentences):
            out.append(note)
            continue

        kept: list[str] = []
        dropped = 0
        for sentence in note.sentences:
            if _is_short(sentence):
                continue
            key = normalizer.normalize(sentence)
            owner = registry.get(key)
            if owner is None:
                for seen_key, seen_owner in registry.items():
                    if scorer.score(key, seen_key) >= threshold:
                        owner = seen_owner
                        break
            if owner is not None:
                dropped += 1
                logger.debug(f"Sentence dropped from note {idx} (already in note {owner}): {sentence[:60]!r}")
                continue
            registry[key] = idx
            kept.append(sentence)

        if dropped:
            warnings.append(Warning(
                code=DecisionCode.SENTENCE_DUPLICATE,
                message=f"Dropped {dropped} sentence(s) from note {idx} already stated by earlier notes",
                note_index=idx,
            ))

        if not kept:
            warnings.append(Warning(
                code=DecisionCode.NOTE_EMPTIED,
                message=f"Note {idx} removed: nothing left that earlier notes do not already say",
                note_index=idx,
            ))
            continue

        content = join_sentences(kept)
        normalized = normalizer.normalize(content)
        out.append(note.model_copy(update={
            "content": content,
            "normalized_content": normalized,
            "sentences": tuple(kept),
            "word_count": len(normalized.split()),
        }))

    return out, warnings
