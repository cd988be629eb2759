"""
Settlement processor: records payments against the ledger.

Every entry point validates completely before touching anything; on success
the transaction is appended to the log and the players' payment fields are
written back to the ledger in the same call.
"""

import math
from dataclasses import replace
from datetime import datetime
from typing import Any

from padelpro.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    NothingPendingError,
    ValidationError,
)
from padelpro.models.payment import FULL_MATCH_PLAYER_ID, PaymentMethod, PaymentTransaction
from padelpro.services.ledger import MatchLedger
from padelpro.services.transaction_log import TransactionLog
from padelpro.utils.logging_utils import EnhancedLoggerMixin, log_execution


def _money(value: float) -> float:
    return round(value, 2)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def calculate_change(amount_due: float, cash_received: Any) -> float:
    """Change to hand back; 0 when nothing usable was entered."""
    if not _is_number(cash_received):
        return 0.0
    return _money(max(0.0, cash_received - amount_due))


def _check_cash(method: PaymentMethod, amount: float, cash_received: Any) -> float | None:
    if method is not PaymentMethod.CASH:
        return None
    if not _is_number(cash_received) or float(cash_received) < _money(amount):
        raise InsufficientFundsError(
            "Cash received must be greater than or equal to the amount due",
            amount,
            cash_received
        )
    return float(cash_received)


class SettlementProcessor(EnhancedLoggerMixin):
    """Turns payment actions into transactions and ledger updates."""

    def __init__(self, ledger: MatchLedger, log: TransactionLog):
        super().__init__()
        self.ledger = ledger
        self.log = log
        self.set_log_context(service="settlement")

    @log_execution(level='DEBUG', include_args=True)
    def pay_individual(
        self,
        match_id: str,
        player_id: str,
        method: PaymentMethod | str,
        amount: Any = None,
        cash_received: Any = None,
        timestamp: datetime | None = None
    ) -> PaymentTransaction:
        """Settle one player, fully or partially.

        ``amount`` defaults to what the player owes. A smaller positive amount
        is a partial payment: the player stays unpaid and ``pending_amount``
        records the remainder. The amount is added to ``amount_paid``;
        ``total_general`` is left alone.

        Raises:
            NotFoundError: Unknown match or player
            ValidationError: The slot has no player in it
            NothingPendingError: The player has already paid
            InvalidAmountError: Amount is not a positive number
            InsufficientFundsError: Cash handed over does not cover the amount
        """
        method = PaymentMethod.parse(method)
        match = self.ledger.get_match(match_id)
        player = match.get_player(player_id)

        if not player.is_named:
            raise ValidationError("Cannot charge an empty player slot", {"player_id": player_id})
        if player.is_paid:
            raise NothingPendingError(f"{player.name} has already paid", match_id)

        due = _money(player.outstanding)
        if amount is None:
            amount = due
        if not _is_number(amount) or amount <= 0:
            raise InvalidAmountError("Payment amount must be a positive number", amount)
        amount = _money(float(amount))
        received = _check_cash(method, amount, cash_received)

        transaction = PaymentTransaction(
            player_id=player.id,
            player_name=player.name,
            amount=amount,
            method=method,
            cash_received=received,
            timestamp=timestamp or datetime.now(),
            match_id=match.id,
        )

        fully_paid = amount >= due
        index = match.player_index(player_id)
        match.players[index] = replace(
            player,
            is_paid=fully_paid,
            pending_amount=0.0 if fully_paid else _money(due - amount),
            amount_paid=_money(player.amount_paid + amount),
            payment_method=method,
        )

        self.ledger.update_match(match)
        self.log.append(transaction)
        self.info(
            "Individual payment settled",
            match_id=match.id,
            player=player.name,
            amount=f"{amount:.2f}",
            fully_paid=fully_paid
        )
        return transaction

    @log_execution(level='DEBUG', include_args=True)
    def pay_full_match(
        self,
        match_id: str,
        method: PaymentMethod | str,
        cash_received: Any = None,
        timestamp: datetime | None = None
    ) -> PaymentTransaction:
        """Settle everything still owed on a match in one transaction.

        The amount is the sum of what each named player still owes, with
        partial payments already taken off. Every named player who had not
        paid ends up paid, with no pending amount.

        Raises:
            NotFoundError: Unknown match
            NothingPendingError: Nothing is owed on the match
            InsufficientFundsError: Cash handed over does not cover the total
        """
        method = PaymentMethod.parse(method)
        match = self.ledger.get_match(match_id)

        pending = _money(match.pending_total)
        if pending <= 0:
            raise NothingPendingError(f"Nothing pending on match {match.id}", match.id)
        received = _check_cash(method, pending, cash_received)

        transaction = PaymentTransaction(
            player_id=FULL_MATCH_PLAYER_ID,
            player_name=f"Full match ({match.responsible})",
            amount=pending,
            method=method,
            cash_received=received,
            timestamp=timestamp or datetime.now(),
            match_id=match.id,
        )

        settled = 0
        for index, player in enumerate(match.players):
            if player.is_named and not player.is_paid:
                match.players[index] = replace(
                    player,
                    is_paid=True,
                    pending_amount=0.0,
                    amount_paid=_money(player.amount_paid + player.outstanding),
                    payment_method=method
                )
                settled += 1

        self.ledger.update_match(match)
        self.log.append(transaction)
        self.info(
            "Full match settled",
            match_id=match.id,
            players=settled,
            amount=f"{pending:.2f}"
        )
        return transaction
