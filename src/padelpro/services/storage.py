"""Local snapshot storage for matches and payments."""

import json
import os
import sqlite3
from collections.abc import Iterable
from datetime import datetime

from padelpro.exceptions import PadelProError, StorageError
from padelpro.models.match import Match
from padelpro.models.payment import PaymentTransaction
from padelpro.utils.logging_utils import EnhancedLoggerMixin

MATCHES_KEY = "padel-matches"
PAYMENTS_KEY = "padel-payments"


class SnapshotStore(EnhancedLoggerMixin):
    """Key-value store holding whole-collection JSON snapshots in SQLite.

    Each save overwrites the previous snapshot of both collections.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize store with database path.

        Args:
            db_path: Path to SQLite database file
        """
        super().__init__()
        self.db_path = db_path
        self.set_log_context(db_path=db_path)

        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        self._init_db()

    def _init_db(self) -> None:
        """Initialize database schema."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS snapshots (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to initialize snapshot store: {e}", self.db_path) from e

    def _get(self, key: str) -> list | None:
        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute("SELECT value FROM snapshots WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        data = json.loads(row[0])
        if not isinstance(data, list):
            raise StorageError(f"Snapshot {key} is not a list", self.db_path)
        return data

    def load(self) -> tuple[list[Match], list[PaymentTransaction]]:
        """Load the saved matches and transactions.

        Returns:
            Matches and transactions, both empty when nothing was saved yet

        Raises:
            StorageError: The database or a snapshot cannot be read
        """
        try:
            matches_data = self._get(MATCHES_KEY) or []
            payments_data = self._get(PAYMENTS_KEY) or []
            matches = [Match.from_dict(item) for item in matches_data]
            payments = [PaymentTransaction.from_dict(item) for item in payments_data]
        except (sqlite3.Error, PadelProError, ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Failed to load snapshot: {e}", self.db_path) from e

        self.debug("Snapshot loaded", matches=len(matches), payments=len(payments))
        return matches, payments

    def save(self, matches: Iterable[Match], payments: Iterable[PaymentTransaction]) -> None:
        """Overwrite the stored snapshot.

        Raises:
            StorageError: The snapshot could not be written
        """
        now = datetime.now().isoformat()
        rows = [
            (MATCHES_KEY, json.dumps([match.to_dict() for match in matches]), now),
            (PAYMENTS_KEY, json.dumps([payment.to_dict() for payment in payments]), now),
        ]
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.executemany(
                    "INSERT OR REPLACE INTO snapshots (key, value, updated_at) VALUES (?, ?, ?)",
                    rows
                )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save snapshot: {e}", self.db_path) from e

        self.debug("Snapshot saved", updated_at=now)
