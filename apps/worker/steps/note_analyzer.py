"""
Per-note structural profile: sentences, markers, entities, signature, priority.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from packages.shared.models import AnalyzedNote, EntitySet, Marker
from apps.worker.lib.analysis_cache import AnalysisCache
from apps.worker.lib.note_matchers import HIGH_VALUE_KEYWORDS
from apps.worker.lib.sentence_split import SentenceSplitter
from apps.worker.lib.text_normalize import TextNormalizer
from apps.worker.steps.note_entities import EntityExtractor

logger = logging.getLogger(__name__)

SIGNATURE_MIN_TOKEN_LEN = 5  # tokens must be longer than 4 characters
SIGNATURE_MAX_TOKENS = 50


def build_signature(normalized: str) -> str:
    """Order-insensitive, lossy fingerprint of a note's significant vocabulary."""
    words = [w for w in normalized.split() if len(w) >= SIGNATURE_MIN_TOKEN_LEN]
    return " ".join(sorted(words)[:SIGNATURE_MAX_TOKENS])


def note_priority(content: str, entities: EntitySet, markers: Iterable[Marker]) -> float:
    low = content.lower()
    score = len(content) / 100
    score += 10 * (len(entities.procedures) + len(entities.complications))
    score += 5 * len(list(markers))
    score += 15 * sum(1 for kw in HIGH_VALUE_KEYWORDS if kw in low)
    return score


class NoteAnalyzer:
    def __init__(
        self,
        normalizer: TextNormalizer | None = None,
        splitter: SentenceSplitter | None = None,
        extractor: EntityExtractor | None = None,
        cache: AnalysisCache | None = None,
    ):
        self.normalizer = normalizer or TextNormalizer()
        self.splitter = splitter or SentenceSplitter()
        self.extractor = extractor or EntityExtractor()
        self.cache = cache

    def analyze(self, raw_note: str) -> AnalyzedNote:
        if self.cache is not None:
            cached = self.cache.get(raw_note)
            if cached is not None:
                return cached

        content = self.normalizer.clean(raw_note)
        normalized = self.normalizer.normalize(content)
        markers = self.extractor.extract_temporal_markers(content)
        entities = self.extractor.extract_key_entities(content)
        note = AnalyzedNote(
            content=content,
            normalized_content=normalized,
            sentences=tuple(self.splitter.split(content)),
            word_count=len(normalized.split()),
            temporal_markers=tuple(markers),
            entities=entities,
            signature=build_signature(normalized),
            priority=note_priority(content, entities, markers),
        )

        if self.cache is not None:
            self.cache.put(raw_note, note)
        return note

    def analyze_many(self, notes: list[str], max_workers: int | None = None) -> list[AnalyzedNote]:
        """Analyze in input order; notes are independent so a thread pool is safe."""
        if not max_workers or max_workers <= 1 or len(notes) < 2:
            return [self.analyze(n) for n in notes]
        logger.debug(f"Analyzing {len(notes)} notes on {max_workers} threads")
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(self.analyze, notes))
