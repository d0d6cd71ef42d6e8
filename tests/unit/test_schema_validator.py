"""
Unit tests for schema validator.
"""
from __future__ import annotations

from packages.shared.schema_validator import validate_output, validate_result
from apps.worker.pipeline import deduplicate_notes


def _minimal() -> dict:
    return {
        "deduplicated": ["Pt underwent craniotomy POD1. Doing well."],
        "metadata": {
            "original": 2,
            "final": 1,
            "exactDuplicatesRemoved": 1,
            "nearDuplicatesRemoved": 0,
            "mergeCount": 0,
            "reductionPercent": 50,
        },
        "warnings": [
            {"code": "EXACT_DUPLICATE", "message": "Note 1 duplicates note 0", "noteIndex": 1},
        ],
    }


def test_validate_output_valid():
    """Test validation with a minimal valid JSON object."""
    is_valid, errors = validate_output(_minimal())
    assert is_valid, f"Validation failed: {errors}"


def test_validate_output_invalid():
    """Test validation with invalid data (missing required metadata fields)."""
    data = _minimal()
    del data["metadata"]["mergeCount"]
    is_valid, errors = validate_output(data)
    assert not is_valid
    assert any("mergeCount" in e for e in errors)


def test_validate_output_unknown_warning_code():
    data = _minimal()
    data["warnings"][0]["code"] = "SOMETHING_ELSE"
    is_valid, errors = validate_output(data)
    assert not is_valid
    assert errors[0].startswith("warnings.0.code")


def test_reduction_percent_bounded():
    data = _minimal()
    data["metadata"]["reductionPercent"] = 150
    is_valid, _ = validate_output(data)
    assert not is_valid


def test_missing_top_level_field_reported_at_root():
    data = _minimal()
    del data["metadata"]
    is_valid, errors = validate_output(data)
    assert not is_valid
    assert errors == ["<result>: 'metadata' is a required property"]


def test_engine_result_validates():
    note = "Pt underwent craniotomy POD1. Doing well."
    result = deduplicate_notes([note, note, 7], {"skipInvalid": True})
    data, errors = validate_result(result)
    assert errors == []
    assert data["metadata"]["skipped"] == [{"index": 2, "reason": "not a string (got int)"}]
