"""
Declarative matcher tables for temporal markers and clinical vocabularies.

Tables are plain data so they can be tested and extended without touching
the pipeline; EntityExtractor takes them at construction time.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Union

from packages.shared.models import EntityCategory, MarkerType

MarkerValue = Union[int, str]


@dataclass(frozen=True)
class TemporalMatcher:
    marker_type: MarkerType
    pattern: re.Pattern
    to_value: Callable[[re.Match], MarkerValue]


def _literal(value: str) -> Callable[[re.Match], MarkerValue]:
    return lambda m: value


TEMPORAL_MATCHERS: list[TemporalMatcher] = [
    TemporalMatcher(MarkerType.DATE, re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"), lambda m: m.group(0)),
    TemporalMatcher(MarkerType.POD, re.compile(r"\bPOD\s*#?\s*(\d+)", re.IGNORECASE), lambda m: int(m.group(1))),
    TemporalMatcher(MarkerType.RELATIVE, re.compile(r"\byesterday\b", re.IGNORECASE), _literal("yesterday")),
    TemporalMatcher(MarkerType.RELATIVE, re.compile(r"\btoday\b", re.IGNORECASE), _literal("today")),
    TemporalMatcher(MarkerType.RELATIVE, re.compile(r"\bthis\s+morning\b", re.IGNORECASE), _literal("this_morning")),
    TemporalMatcher(
        MarkerType.RELATIVE,
        re.compile(r"\b(\d+)\s+days?\s+ago\b", re.IGNORECASE),
        lambda m: f"days_ago_{m.group(1)}",
    ),
]

PROCEDURE_TERMS = (
    "craniotomy", "coiling", "clipping", "evd", "ventriculostomy",
    "angiogram", "embolization", "resection", "biopsy", "surgery",
)
COMPLICATION_TERMS = (
    "vasospasm", "hydrocephalus", "hemorrhage", "infection",
    "seizure", "stroke", "edema", "herniation",
)

# Medication and exam-finding categories are filled by richer extractors.
VOCABULARIES: dict[EntityCategory, tuple[str, ...]] = {
    EntityCategory.PROCEDURES: PROCEDURE_TERMS,
    EntityCategory.MEDICATIONS: (),
    EntityCategory.COMPLICATIONS: COMPLICATION_TERMS,
    EntityCategory.EXAM_FINDINGS: (),
}

HIGH_VALUE_KEYWORDS = ("operative", "procedure", "impression", "assessment", "discharge", "follow-up")
