"""
Temporal marker and clinical keyword extraction.
"""
from __future__ import annotations

from typing import Iterable, Mapping

from packages.shared.models import EntityCategory, EntitySet, Marker
from apps.worker.lib.note_matchers import TEMPORAL_MATCHERS, VOCABULARIES, TemporalMatcher


class EntityExtractor:
    def __init__(
        self,
        temporal_matchers: Iterable[TemporalMatcher] | None = None,
        vocabularies: Mapping[EntityCategory, Iterable[str]] | None = None,
    ):
        self.temporal_matchers = list(TEMPORAL_MATCHERS if temporal_matchers is None else temporal_matchers)
        vocab = VOCABULARIES if vocabularies is None else vocabularies
        self.vocabularies = {
            EntityCategory(cat): tuple(t.lower() for t in terms) for cat, terms in vocab.items()
        }

    def extract_temporal_markers(self, text: str) -> list[Marker]:
        """All markers in the note, ordered by character position."""
        if not text:
            return []
        found: list[tuple[int, int, Marker]] = []
        for order, matcher in enumerate(self.temporal_matchers):
            for m in matcher.pattern.finditer(text):
                marker = Marker(type=matcher.marker_type, value=matcher.to_value(m), position=m.start())
                found.append((m.start(), order, marker))
        found.sort(key=lambda x: (x[0], x[1]))
        return [marker for _, _, marker in found]

    def extract_key_entities(self, text: str) -> EntitySet:
        low = (text or "").lower()
        hits: dict[str, frozenset[str]] = {}
        for category, terms in self.vocabularies.items():
            hits[category.value] = frozenset(t for t in terms if t and t in low)
        return EntitySet(**hits)


_default_extractor = EntityExtractor()


def extract_temporal_markers(text: str) -> list[Marker]:
    return _default_extractor.extract_temporal_markers(text)


def extract_key_entities(text: str) -> EntitySet:
    return _default_extractor.extract_key_entities(text)
