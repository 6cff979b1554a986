"""Tests for the run record models."""

import pytest
from pydantic import ValidationError

from pipestep.models.trace import PipelineTrace, StageRecord


def test_stage_record_defaults():
    """Test that a new stage starts pending with no result or error."""
    record = StageRecord(index=1, text="add_one()")

    assert record.status == "pending"
    assert record.result_type is None
    assert record.error is None


def test_stage_record_validation():
    """Test invalid status, index and extra fields."""
    with pytest.raises(ValidationError):
        StageRecord(index=1, text="f", status="exploded")

    with pytest.raises(ValidationError):
        StageRecord(index=0, text="f")

    with pytest.raises(ValidationError):
        StageRecord(index=1, text="f", duration=3.0)


def test_pipeline_trace_failed_stage_and_counts():
    """Test lookup of the reported failure and status counts."""
    trace = PipelineTrace(
        source="x >> f >> g >> h",
        width=8,
        stages=[
            StageRecord(index=1, text="f", status="success", result_type="int"),
            StageRecord(index=2, text="g", status="failure_reported", error="ValueError: bad"),
            StageRecord(index=3, text="h"),
        ],
    )

    assert trace.failed_stage.index == 2
    assert trace.count("success") == 1
    assert trace.count("pending") == 1
    assert trace.completed is False
