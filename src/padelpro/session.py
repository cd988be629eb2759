"""
Session facade wiring the ledger, the transaction log, settlement and storage.
"""

from padelpro.exceptions import StorageError, handle_errors
from padelpro.models.catalog import PricingTable
from padelpro.services.ledger import MatchLedger
from padelpro.services.settlement import SettlementProcessor
from padelpro.services.storage import SnapshotStore
from padelpro.services.transaction_log import TransactionLog
from padelpro.utils.logging_utils import EnhancedLoggerMixin


class PadelProSession(EnhancedLoggerMixin):
    """Everything one front desk session works with.

    The saved snapshot is loaded on start, and a fresh snapshot is written
    after every change to the ledger or the log. Saving is best effort: a
    failed save is logged and the in-memory state stays as it is.
    """

    def __init__(self, pricing: PricingTable, store: SnapshotStore | None = None):
        super().__init__()
        self.pricing = pricing
        self.store = store
        self.set_log_context(service="session")

        matches, payments = store.load() if store is not None else ([], [])
        self.ledger = MatchLedger(pricing, matches)
        self.log = TransactionLog(payments)
        self.settlement = SettlementProcessor(self.ledger, self.log)

        self.ledger.subscribe(self.save)
        self.log.subscribe(self.save)
        self.info("Session started", matches=len(self.ledger), payments=len(self.log))

    def save(self) -> bool:
        """Snapshot the current state. Returns whether the snapshot was written."""
        if self.store is None:
            return False

        saved = False

        def _report_failure() -> None:
            self.warning("Snapshot not saved, keeping in-memory state")

        with handle_errors(StorageError, "session", "save", fallback=_report_failure):
            self.store.save(self.ledger.matches, self.log.all())
            saved = True
        return saved
