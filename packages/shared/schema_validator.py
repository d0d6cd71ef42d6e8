"""
Check deduplication results against schemas/note-dedup-result.schema.json.

The schema describes the camelCase wire form, so models are dumped with
their aliases before validation.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from packages.shared.models import DedupResult

RESULT_SCHEMA_PATH = Path(__file__).resolve().parents[2] / "schemas" / "note-dedup-result.schema.json"
_validator: jsonschema.Draft202012Validator | None = None


def _result_validator() -> jsonschema.Draft202012Validator:
    global _validator
    if _validator is None:
        schema = json.loads(RESULT_SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.Draft202012Validator.check_schema(schema)
        _validator = jsonschema.Draft202012Validator(schema)
    return _validator


def _describe(error: jsonschema.ValidationError) -> str:
    where = ".".join(str(p) for p in error.absolute_path) or "<result>"
    return f"{where}: {error.message}"


def validate_output(data: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate a camelCase result dict.
    Returns (is_valid, messages), messages ordered by location in the document.
    """
    errors = sorted(_result_validator().iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    messages = [_describe(e) for e in errors]
    return (not messages, messages)


def validate_result(result: DedupResult) -> tuple[dict[str, Any], list[str]]:
    """Dump a DedupResult to its wire form and validate it; returns (data, messages)."""
    data = result.model_dump(mode="json", by_alias=True)
    _, messages = validate_output(data)
    return data, messages
