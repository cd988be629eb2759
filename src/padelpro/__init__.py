"""
Padel facility billing and settlement engine.
"""

__version__ = '0.1.0'

from .exceptions import (
    ConfigError,
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
    NothingPendingError,
    PadelProError,
    ScheduleConflictError,
    StorageError,
    ValidationError,
)

__all__ = [
    'ConfigError',
    'InsufficientFundsError',
    'InvalidAmountError',
    'NotFoundError',
    'NothingPendingError',
    'PadelProError',
    'ScheduleConflictError',
    'StorageError',
    'ValidationError',
]
