"""Tests for error types and the error handling context manager."""

import pytest

from padelpro.config.error_aggregator import init_error_aggregator
from padelpro.config.logging_config import ErrorAggregationConfig
from padelpro.error_codes import ErrorCode
from padelpro.exceptions import (
    InvalidAmountError,
    NotFoundError,
    ScheduleConflictError,
    StorageError,
    ValidationError,
    handle_errors,
)


def test_error_string_includes_code_and_details():
    error = NotFoundError("Match m1 not found", {"match_id": "m1"})
    assert str(error) == "Match m1 not found (Code: not_found, Details: {'match_id': 'm1'})"
    assert str(ValidationError("Bad input")) == "Bad input (Code: validation_failed)"

def test_schedule_conflict_is_validation_error():
    error = ScheduleConflictError("Court 1 is already booked")
    assert isinstance(error, ValidationError)
    assert error.code is ErrorCode.SCHEDULE_CONFLICT

def test_invalid_amount_details():
    assert InvalidAmountError("Bad amount", -3).details == {"amount": -3}

def test_handle_errors_reraises():
    with pytest.raises(StorageError):
        with handle_errors(StorageError, "session", "save"):
            raise StorageError("disk full", "padelpro.db")

def test_handle_errors_fallback_suppresses():
    calls = []
    with handle_errors(StorageError, "session", "save", fallback=lambda: calls.append("fallback")):
        raise StorageError("disk full", "padelpro.db")
    assert calls == ["fallback"]

def test_handle_errors_unexpected_error():
    with pytest.raises(KeyError):
        with handle_errors(StorageError, "session", "save"):
            raise KeyError("matches")

def test_handled_errors_are_aggregated():
    aggregator = init_error_aggregator(ErrorAggregationConfig(error_threshold=10))

    with handle_errors(StorageError, "session", "save", fallback=lambda: None):
        raise StorageError("disk full", "padelpro.db")

    group = aggregator.pending[str(StorageError("disk full", "padelpro.db"))]
    assert group.count == 1
    assert group.services == {"session"}
