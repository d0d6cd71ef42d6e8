from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import EntityCategory, MarkerType


class Marker(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: MarkerType
    value: Union[int, str]
    position: int = Field(ge=0)  # character offset in the originating note


class EntitySet(BaseModel):
    model_config = ConfigDict(frozen=True)

    procedures: frozenset[str] = frozenset()
    medications: frozenset[str] = frozenset()
    complications: frozenset[str] = frozenset()
    exam_findings: frozenset[str] = frozenset()

    @property
    def count(self) -> int:
        return len(self.procedures) + len(self.medications) + len(self.complications) + len(self.exam_findings)

    def get(self, category: EntityCategory) -> frozenset[str]:
        return getattr(self, category.value)

    def union(self, other: "EntitySet") -> "EntitySet":
        """Per-category union; returns a new set, both inputs untouched."""
        return EntitySet(
            procedures=self.procedures | other.procedures,
            medications=self.medications | other.medications,
            complications=self.complications | other.complications,
            exam_findings=self.exam_findings | other.exam_findings,
        )
