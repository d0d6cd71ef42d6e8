"""
Unit tests for clustering short repeated items.
"""
from __future__ import annotations

from apps.worker.lib.item_consolidation import consolidate_items, deduplicate_items


def test_case_variants_cluster():
    clusters = consolidate_items(["Craniotomy", "craniotomy", "EVD placement", 5, "  "])
    assert [c.representative for c in clusters] == ["Craniotomy", "EVD placement"]
    assert clusters[0].variants == ["Craniotomy", "craniotomy"]
    assert clusters[0].occurrences == 2
    assert abs(clusters[0].confidence - 0.7) < 1e-9
    assert abs(clusters[1].confidence - 0.6) < 1e-9


def test_confidence_capped():
    clusters = consolidate_items(["EVD"] * 9)
    assert len(clusters) == 1
    assert clusters[0].confidence == 1.0


def test_threshold_controls_grouping():
    items = ["left frontal craniotomy", "right frontal craniotomy"]
    assert len(consolidate_items(items, threshold=0.5)) == 1
    assert len(consolidate_items(items, threshold=0.85)) == 2


def test_deduplicate_items_keeps_first_wording():
    assert deduplicate_items(["Nimodipine", "NIMODIPINE", "Keppra"]) == ["Nimodipine", "Keppra"]


def test_empty():
    assert consolidate_items(None) == []
    assert deduplicate_items([]) == []
