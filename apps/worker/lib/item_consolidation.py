"""
Cluster short extracted strings (procedures, findings, plan items) that say
the same thing, keeping the first wording as the representative.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from apps.worker.lib.similarity import SimilarityScorer

DEFAULT_ITEM_THRESHOLD = 0.85


@dataclass
class ItemCluster:
    representative: str
    normalized: str
    variants: list[str] = field(default_factory=list)

    @property
    def occurrences(self) -> int:
        return len(self.variants)

    @property
    def confidence(self) -> float:
        # Repeated mentions across notes raise confidence.
        return min(0.5 + 0.1 * self.occurrences, 1.0)


def consolidate_items(
    items: list, threshold: float = DEFAULT_ITEM_THRESHOLD, scorer: SimilarityScorer | None = None
) -> list[ItemCluster]:
    scorer = scorer or SimilarityScorer()
    clusters: list[ItemCluster] = []
    for item in items or []:
        if not isinstance(item, str) or not item.strip():
            continue
        text = item.strip()
        normalized = text.lower()
        for cluster in clusters:
            if scorer.score(normalized, cluster.normalized) >= threshold:
                cluster.variants.append(text)
                break
        else:
            clusters.append(ItemCluster(representative=text, normalized=normalized, variants=[text]))
    return clusters


def deduplicate_items(items: list, threshold: float = DEFAULT_ITEM_THRESHOLD) -> list[str]:
    return [c.representative for c in consolidate_items(items, threshold)]
