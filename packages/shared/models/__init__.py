from .enums import DecisionCode, EntityCategory, MarkerType, SimilarityMethod
from .common import EntitySet, Marker
from .domain import (
    AnalyzedNote,
    DedupConfig,
    DedupMetadata,
    DedupResult,
    SkippedNote,
    Warning,
    load_config,
)

__all__ = [
    "AnalyzedNote",
    "DecisionCode",
    "DedupConfig",
    "DedupMetadata",
    "DedupResult",
    "EntityCategory",
    "EntitySet",
    "Marker",
    "MarkerType",
    "SimilarityMethod",
    "SkippedNote",
    "Warning",
    "load_config",
]
