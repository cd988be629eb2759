"""Error codes for the padel billing application."""

from enum import Enum

class ErrorCode(Enum):
    """Enumeration of all possible error codes."""
    # Data Errors
    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"

    # Scheduling Errors
    SCHEDULE_CONFLICT = "schedule_conflict"

    # Settlement Errors
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOTHING_PENDING = "nothing_pending"

    # Configuration Errors
    CONFIG_INVALID = "config_invalid"

    # Storage Errors
    STORAGE_ERROR = "storage_error"

