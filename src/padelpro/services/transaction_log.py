"""
Append-only log of completed payment transactions.
"""

from collections.abc import Callable, Iterable, Iterator
from datetime import date, datetime

from padelpro.models.payment import PaymentTransaction
from padelpro.utils.logging_utils import EnhancedLoggerMixin
from padelpro.utils.time_utils import to_day


class TransactionLog(EnhancedLoggerMixin):
    """Completed transactions in the order they were recorded.

    Transactions are immutable and the log only grows.
    """

    def __init__(self, transactions: Iterable[PaymentTransaction] | None = None):
        super().__init__()
        self._transactions: list[PaymentTransaction] = list(transactions or [])
        self._listeners: list[Callable[[], None]] = []
        self.set_log_context(service="transaction_log")

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[PaymentTransaction]:
        return iter(tuple(self._transactions))

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after every append."""
        self._listeners.append(listener)

    def append(self, transaction: PaymentTransaction) -> PaymentTransaction:
        self._transactions.append(transaction)
        self.info(
            "Payment recorded",
            transaction_id=transaction.id,
            player=transaction.player_name,
            amount=f"{transaction.amount:.2f}",
            method=transaction.method.value
        )
        for listener in self._listeners:
            listener()
        return transaction

    def all(self) -> tuple[PaymentTransaction, ...]:
        return tuple(self._transactions)

    def for_day(self, day: date | datetime | str) -> list[PaymentTransaction]:
        """Transactions whose timestamp falls on the given calendar day."""
        day = to_day(day)
        return [t for t in self._transactions if t.timestamp.date() == day]

    def total_for_day(self, day: date | datetime | str) -> float:
        return sum(t.amount for t in self.for_day(day))

    def for_match(self, match_id: str) -> list[PaymentTransaction]:
        return [t for t in self._transactions if t.match_id == match_id]
