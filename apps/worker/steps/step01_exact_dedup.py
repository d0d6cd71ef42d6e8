"""
Step 1: Exact duplicate removal.
Drop any note whose normalized text matches an earlier note; first occurrence wins.
"""
from __future__ import annotations

from packages.shared.models import DecisionCode, Warning
from apps.worker.lib.text_normalize import TextNormalizer


def remove_exact_duplicates(
    notes: list[str], normalizer: TextNormalizer | None = None
) -> tuple[list[str], list[Warning]]:
    normalizer = normalizer or TextNormalizer()
    warnings: list[Warning] = []
    seen: dict[str, int] = {}
    unique: list[str] = []

    for idx, note in enumerate(notes):
        key = normalizer.normalize(note)
        if key in seen:
            warnings.append(Warning(
                code=DecisionCode.EXACT_DUPLICATE,
                message=f"Note {idx} duplicates note {seen[key]} after normalization",
                note_index=idx,
            ))
            continue
        seen[key] = idx
        unique.append(note)

    return unique, warnings
