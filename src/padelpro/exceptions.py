"""Centralized error definitions for the padel billing application."""

import logging
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any
from typing import TypeVar

from padelpro.config.error_aggregator import aggregate_error
from padelpro.error_codes import ErrorCode


logger = logging.getLogger(__name__)

T = TypeVar('T')

@dataclass
class PadelProError(Exception):
    """Base exception for all padel billing errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ValidationError(PadelProError):
    """Missing or malformed input."""
    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED
    ):
        super().__init__(message, code, details)

class ScheduleConflictError(ValidationError):
    """Requested slot overlaps an existing match on the same court."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, details, code=ErrorCode.SCHEDULE_CONFLICT)

class NotFoundError(PadelProError):
    """Referenced match, player or product does not exist."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.NOT_FOUND, details)

class InvalidAmountError(PadelProError):
    """Payment amount is non-numeric or not positive."""
    def __init__(self, message: str, amount: Any = None):
        super().__init__(message, ErrorCode.INVALID_AMOUNT, {"amount": amount})

class InsufficientFundsError(PadelProError):
    """Cash received does not cover the amount due."""
    def __init__(self, message: str, amount_due: float, cash_received: Any):
        super().__init__(
            message,
            ErrorCode.INSUFFICIENT_FUNDS,
            {"amount_due": amount_due, "cash_received": cash_received}
        )

class NothingPendingError(PadelProError):
    """Whole-match settlement attempted with nothing left to pay."""
    def __init__(self, message: str, match_id: str):
        super().__init__(message, ErrorCode.NOTHING_PENDING, {"match_id": match_id})

class ConfigError(PadelProError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)

class StorageError(PadelProError):
    """Snapshot storage error."""
    def __init__(self, message: str, db_path: str):
        super().__init__(message, ErrorCode.STORAGE_ERROR, {"db_path": db_path})

@contextmanager
def handle_errors(
    error_type: type[PadelProError],
    service: str,
    operation: str,
    fallback: Callable[[], T] | None = None
) -> Iterator[None]:
    """Handle errors in a context manager.

    Expected errors of ``error_type`` are aggregated and re-raised unless a
    fallback is given. Anything else is logged with its traceback first.

    Args:
        error_type: The error type to catch
        service: The service name
        operation: The operation name
        fallback: Optional function called instead of re-raising
    """
    try:
        yield
    except error_type as e:
        aggregate_error(str(e), service, e.__traceback__)

        if fallback:
            fallback()
            return
        raise
    except Exception as e:
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        aggregate_error(str(e), service, e.__traceback__)

        if fallback:
            fallback()
            return
        raise
