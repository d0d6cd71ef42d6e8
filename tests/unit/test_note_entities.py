import re

from packages.shared.models import EntityCategory, MarkerType
from apps.worker.lib.note_matchers import TEMPORAL_MATCHERS, TemporalMatcher
from apps.worker.steps.note_entities import EntityExtractor, extract_key_entities, extract_temporal_markers


def test_markers_ordered_by_position() -> None:
    text = "Seen 03/14/2024 on POD#2, yesterday had seizure. 3 days ago EVD placed. This morning stable."
    markers = extract_temporal_markers(text)
    assert [m.type for m in markers] == [
        MarkerType.DATE, MarkerType.POD, MarkerType.RELATIVE, MarkerType.RELATIVE, MarkerType.RELATIVE,
    ]
    assert [m.value for m in markers] == ["03/14/2024", 2, "yesterday", "days_ago_3", "this_morning"]
    positions = [m.position for m in markers]
    assert positions == sorted(positions)
    assert markers[0].position == text.index("03/14/2024")


def test_pod_variants() -> None:
    for text, expected in [("POD1 stable", 1), ("pod#3 stable", 3), ("POD 12 stable", 12)]:
        markers = extract_temporal_markers(text)
        assert len(markers) == 1
        assert markers[0].type == MarkerType.POD
        assert markers[0].value == expected


def test_today_not_matched_inside_other_words() -> None:
    assert extract_temporal_markers("Todays plan unchanged") == []
    assert [m.value for m in extract_temporal_markers("Seen today")] == ["today"]


def test_no_markers() -> None:
    assert extract_temporal_markers("") == []
    assert extract_temporal_markers("Family meeting held.") == []


def test_entities_case_insensitive_and_unique() -> None:
    ents = extract_key_entities("s/p craniotomy with EVD; CRANIOTOMY site ok; vasospasm noted, vasospasm resolving")
    assert ents.procedures == frozenset({"craniotomy", "evd"})
    assert ents.complications == frozenset({"vasospasm"})
    assert ents.medications == frozenset()
    assert ents.exam_findings == frozenset()
    assert ents.count == 3


def test_pluggable_vocabularies_and_matchers() -> None:
    extractor = EntityExtractor(
        temporal_matchers=[
            *TEMPORAL_MATCHERS,
            TemporalMatcher(MarkerType.RELATIVE, re.compile(r"\bovernight\b", re.IGNORECASE), lambda m: "overnight"),
        ],
        vocabularies={
            EntityCategory.MEDICATIONS: ["Nimodipine", "levetiracetam"],
            EntityCategory.EXAM_FINDINGS: ["pupils equal"],
        },
    )
    ents = extractor.extract_key_entities("Started nimodipine overnight, pupils equal and reactive.")
    assert ents.medications == frozenset({"nimodipine"})
    assert ents.exam_findings == frozenset({"pupils equal"})
    assert ents.procedures == frozenset()
    assert [m.value for m in extractor.extract_temporal_markers("Seizure overnight")] == ["overnight"]
