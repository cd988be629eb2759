"""Service implementations."""

from .billing import BillingCalculator, recompute_totals
from .ledger import MatchLedger
from .scheduling import available_time_slots, has_overlap
from .settlement import SettlementProcessor, calculate_change
from .storage import SnapshotStore
from .transaction_log import TransactionLog


__all__ = [
    'BillingCalculator',
    'MatchLedger',
    'SettlementProcessor',
    'SnapshotStore',
    'TransactionLog',
    'available_time_slots',
    'calculate_change',
    'has_overlap',
    'recompute_totals',
]
