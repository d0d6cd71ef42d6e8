"""
Bounded [0, 1] string similarity.

Every scorer here is commutative, reflexive and total: score(x, x) == 1.0,
score("", "") == 1.0, score("", "x") == 0.0, and nothing raises on empty input.
"""
from __future__ import annotations

from rapidfuzz.distance import Levenshtein

from packages.shared.errors import ConfigurationError
from packages.shared.models import SimilarityMethod


def _token_set(text: str) -> set[str]:
    return set((text or "").lower().split())


def jaccard_similarity(a: str, b: str) -> float:
    """Jaccard index over lower-cased whitespace tokens."""
    ta, tb = _token_set(a), _token_set(b)
    if not ta and not tb:
        return 1.0
    if not ta or not tb:
        return 0.0
    return len(ta & tb) / len(ta | tb)


def levenshtein_similarity(a: str, b: str) -> float:
    a, b = (a or "").lower(), (b or "").lower()
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return Levenshtein.normalized_similarity(a, b)


def hybrid_similarity(a: str, b: str) -> float:
    """Equal blend of token overlap and character edit distance."""
    if not (a or "").strip() and not (b or "").strip():
        return 1.0
    if not (a or "").strip() or not (b or "").strip():
        return 0.0
    return 0.5 * jaccard_similarity(a, b) + 0.5 * levenshtein_similarity(a, b)


_SCORERS = {
    SimilarityMethod.JACCARD: jaccard_similarity,
    SimilarityMethod.HYBRID: hybrid_similarity,
}


class SimilarityScorer:
    def __init__(self, method: SimilarityMethod | str = SimilarityMethod.JACCARD):
        try:
            self.method = SimilarityMethod(method)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown similarity method: {method!r}") from exc
        self._fn = _SCORERS[self.method]

    def score(self, a: str, b: str) -> float:
        value = self._fn(a or "", b or "")
        return min(1.0, max(0.0, value))

    def __repr__(self) -> str:
        return f"SimilarityScorer(method={self.method.value!r})"
