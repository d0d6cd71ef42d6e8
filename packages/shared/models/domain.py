import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from packages.shared.errors import ConfigurationError

from .common import EntitySet, Marker
from .enums import DecisionCode, SimilarityMethod

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class Warning(BaseModel):
    """One explained pipeline decision (drop, collapse, merge, skip)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: DecisionCode
    message: str
    note_index: Optional[int] = None


class SkippedNote(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    index: int
    reason: str


class AnalyzedNote(BaseModel):
    """Structured profile of one note. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    content: str
    normalized_content: str
    sentences: tuple[str, ...] = ()
    word_count: int = 0
    temporal_markers: tuple[Marker, ...] = ()
    entities: EntitySet = Field(default_factory=EntitySet)
    signature: str = ""
    priority: float = 0.0

    @property
    def first_marker_position(self) -> int | None:
        if not self.temporal_markers:
            return None
        return self.temporal_markers[0].position


class DedupConfig(BaseModel):
    """Configuration for a deduplication run."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    similarity_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    preserve_chronology: bool = True
    merge_complementary: bool = True
    remove_boilerplate: bool = True
    similarity_method: SimilarityMethod = SimilarityMethod.JACCARD
    skip_invalid: bool = False  # record non-string entries instead of failing fast

    @classmethod
    def from_env(cls, **overrides) -> "DedupConfig":
        """Build a config from NOTE_DEDUP_* environment variables; keyword overrides win."""
        values: dict = {}
        raw = os.getenv("NOTE_DEDUP_SIMILARITY_THRESHOLD", "").strip()
        if raw:
            try:
                values["similarity_threshold"] = float(raw)
            except ValueError as exc:
                raise ConfigurationError(f"NOTE_DEDUP_SIMILARITY_THRESHOLD is not a number: {raw!r}") from exc
        for field_name in ("preserve_chronology", "merge_complementary", "remove_boilerplate", "skip_invalid"):
            env_name = f"NOTE_DEDUP_{field_name.upper()}"
            flag = os.getenv(env_name, "").strip().lower()
            if not flag:
                continue
            if flag in _TRUTHY:
                values[field_name] = True
            elif flag in _FALSY:
                values[field_name] = False
            else:
                raise ConfigurationError(f"{env_name} must be a boolean flag, got {flag!r}")
        method = os.getenv("NOTE_DEDUP_SIMILARITY_METHOD", "").strip().lower()
        if method:
            values["similarity_method"] = method
        values.update(overrides)
        return load_config(values)


def load_config(value: "DedupConfig | dict | None" = None) -> DedupConfig:
    """Coerce None / dict / DedupConfig into a validated DedupConfig."""
    if value is None:
        return DedupConfig()
    if isinstance(value, DedupConfig):
        return value
    if not isinstance(value, dict):
        raise ConfigurationError(f"Unsupported configuration type: {type(value).__name__}")
    try:
        return DedupConfig.model_validate(value)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid deduplication config: {problems}") from exc


class DedupMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original: int = 0
    final: int = 0
    exact_duplicates_removed: int = 0
    near_duplicates_removed: int = 0
    emptied_notes_removed: int = 0
    merge_count: int = 0
    reduction_percent: int = 0
    removed: int = 0
    merged: int = 0
    skipped: list[SkippedNote] = Field(default_factory=list)


class DedupResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    deduplicated: list[str] = Field(default_factory=list)
    metadata: DedupMetadata = Field(default_factory=DedupMetadata)
    warnings: list[Warning] = Field(default_factory=list)
