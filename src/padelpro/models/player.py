"""
Player model: consumption records, derived totals and payment status.
"""

from dataclasses import dataclass, field
from typing import Any

from padelpro.models.payment import PaymentMethod
from padelpro.utils.id_utils import generate_id


@dataclass
class FieldConsumption:
    """Court-side consumption of one player."""
    court_share: int = 0
    court_amount: float = 0.0
    tube_share: int = 0
    tube_amount: float = 0.0
    overgrip: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "courtShare": self.court_share,
            "courtAmount": self.court_amount,
            "tubeShare": self.tube_share,
            "tubeAmount": self.tube_amount,
            "overgrip": self.overgrip,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldConsumption":
        return cls(
            court_share=int(data.get("courtShare", 0)),
            court_amount=float(data.get("courtAmount", 0)),
            tube_share=int(data.get("tubeShare", 0)),
            tube_amount=float(data.get("tubeAmount", 0)),
            overgrip=float(data.get("overgrip", 0)),
        )


@dataclass
class BarItem:
    """Bar line item with a unit price snapshot."""
    name: str
    price: float
    quantity: int = 1
    id: str = field(default_factory=generate_id)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "price": self.price, "quantity": self.quantity}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BarItem":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            price=float(data["price"]),
            quantity=int(data["quantity"]),
        )


@dataclass
class Player:
    """One roster slot of a match.

    A blank name marks an unfilled slot; such players are left out of every
    aggregate. ``total_field``, ``total_bar`` and ``total_general`` are a
    cache filled only by ``padelpro.services.billing.recompute_totals``.
    ``amount_paid`` accumulates every payment taken from the player. Once a
    payment is on record, ``pending_amount`` and ``is_paid`` are derived from
    it on each recompute, so consumption added later is still owed.
    ``total_general`` is never reduced by payments.
    """
    id: str = field(default_factory=generate_id)
    name: str = ""
    is_owner: bool = False
    field_consumption: FieldConsumption = field(default_factory=FieldConsumption)
    bar_consumption: list[BarItem] = field(default_factory=list)
    total_field: float = 0.0
    total_bar: float = 0.0
    total_general: float = 0.0
    is_paid: bool = False
    payment_method: PaymentMethod | None = None
    pending_amount: float | None = None
    amount_paid: float = 0.0

    @property
    def has_payment(self) -> bool:
        """Whether any settlement was recorded for this player."""
        return self.payment_method is not None or self.amount_paid > 0

    @property
    def is_named(self) -> bool:
        """Whether the slot holds a real player."""
        return bool(self.name.strip())

    @property
    def outstanding(self) -> float:
        """What this player still owes."""
        if self.is_paid:
            return 0.0
        if self.pending_amount is not None:
            return self.pending_amount
        return self.total_general

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "isOwner": self.is_owner,
            "fieldConsumption": self.field_consumption.to_dict(),
            "barConsumption": [item.to_dict() for item in self.bar_consumption],
            "totalField": self.total_field,
            "totalBar": self.total_bar,
            "totalGeneral": self.total_general,
            "isPaid": self.is_paid,
            "amountPaid": self.amount_paid,
        }
        if self.payment_method is not None:
            data["paymentMethod"] = self.payment_method.value
        if self.pending_amount is not None:
            data["pendingAmount"] = self.pending_amount
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Player":
        method = data.get("paymentMethod")
        pending = data.get("pendingAmount")
        total_general = float(data.get("totalGeneral", 0))
        is_paid = bool(data.get("isPaid", False))
        amount_paid = data.get("amountPaid")
        if amount_paid is None:
            # Snapshots without a running total: rebuild it from the status
            if is_paid:
                amount_paid = total_general
            elif pending is not None:
                amount_paid = max(0.0, total_general - float(pending))
            else:
                amount_paid = 0.0
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            is_owner=bool(data.get("isOwner", False)),
            field_consumption=FieldConsumption.from_dict(data.get("fieldConsumption", {})),
            bar_consumption=[BarItem.from_dict(item) for item in data.get("barConsumption", [])],
            total_field=float(data.get("totalField", 0)),
            total_bar=float(data.get("totalBar", 0)),
            total_general=total_general,
            is_paid=is_paid,
            payment_method=PaymentMethod.parse(method) if method else None,
            pending_amount=float(pending) if pending is not None else None,
            amount_paid=float(amount_paid),
        )
