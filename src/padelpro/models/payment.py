"""
Payment transaction model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from padelpro.exceptions import InsufficientFundsError, InvalidAmountError
from padelpro.utils.id_utils import generate_id
from padelpro.utils.time_utils import parse_timestamp

FULL_MATCH_PLAYER_ID = "full-match"


class PaymentMethod(str, Enum):
    """How a settlement was paid."""
    CARD = "card"
    CASH = "cash"

    @classmethod
    def parse(cls, value: "str | PaymentMethod") -> "PaymentMethod":
        """Parse a method name; the card terminal was stored as ``POS``."""
        if isinstance(value, PaymentMethod):
            return value
        normalized = str(value).strip().lower()
        if normalized == "pos":
            return cls.CARD
        return cls(normalized)


@dataclass(frozen=True)
class PaymentTransaction:
    """A completed payment. Never modified once created."""
    player_id: str
    player_name: str
    amount: float
    method: PaymentMethod
    cash_received: float | None = None
    change: float | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    match_id: str | None = None
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise InvalidAmountError("Transaction amount must be positive", self.amount)
        if self.method is PaymentMethod.CASH:
            if self.cash_received is None or self.cash_received < self.amount:
                raise InsufficientFundsError(
                    "Cash received must cover the amount",
                    self.amount,
                    self.cash_received
                )
            # change is always derived from what was handed over
            object.__setattr__(self, "change", self.cash_received - self.amount)

    @property
    def is_full_match(self) -> bool:
        return self.player_id == FULL_MATCH_PLAYER_ID

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "playerId": self.player_id,
            "playerName": self.player_name,
            "amount": self.amount,
            "method": self.method.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.cash_received is not None:
            data["cashReceived"] = self.cash_received
            data["change"] = self.change
        if self.match_id is not None:
            data["matchId"] = self.match_id
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PaymentTransaction":
        cash_received = data.get("cashReceived")
        return cls(
            id=str(data["id"]),
            player_id=str(data["playerId"]),
            player_name=str(data.get("playerName", "")),
            amount=float(data["amount"]),
            method=PaymentMethod.parse(data["method"]),
            cash_received=float(cash_received) if cash_received is not None else None,
            timestamp=parse_timestamp(data["timestamp"]),
            match_id=data.get("matchId"),
        )
