"""
Billing calculator.

Turns a player's recorded consumption into money. ``recompute_totals`` is the
only writer of the court/tube amounts and of the three total fields; every
edit helper below returns a fresh ``Player`` that has already been through it.
"""

from dataclasses import replace
from typing import Any

from padelpro.exceptions import NotFoundError, ValidationError
from padelpro.models.catalog import Court, PricingTable
from padelpro.models.player import BarItem, FieldConsumption, Player


def court_amount(pricing: PricingTable, court: Court, court_share: int, is_owner: bool) -> float:
    """Court fee for one player.

    Owners pay the flat owner rate whatever the share or category. Everyone
    else pays the court base price divided by the chosen share; an unset
    share (0) costs nothing yet.
    """
    if is_owner:
        return pricing.owner_court_rate
    if court_share <= 0:
        return 0.0
    return pricing.court_base_price(court) / court_share


def tube_amount(pricing: PricingTable, tube_share: int) -> float:
    """Share of the ball tube price."""
    if tube_share <= 0:
        return 0.0
    return pricing.tube_price / tube_share


def bar_total(items: list[BarItem]) -> float:
    return sum(item.subtotal for item in items)


def recompute_totals(player: Player, court: Court, pricing: PricingTable) -> Player:
    """Return ``player`` with amounts and totals derived from its consumption.

    Pure and total: the input is not modified. For a player with a payment
    on record, the pending amount and paid flag follow the new total.
    """
    consumption = player.field_consumption
    field_consumption = replace(
        consumption,
        court_amount=court_amount(pricing, court, consumption.court_share, player.is_owner),
        tube_amount=tube_amount(pricing, consumption.tube_share),
    )
    total_field = field_consumption.court_amount + field_consumption.tube_amount + field_consumption.overgrip
    total_bar = bar_total(player.bar_consumption)
    total_general = total_field + total_bar

    payment: dict[str, Any] = {}
    if player.has_payment:
        pending = max(0.0, round(total_general - player.amount_paid, 2))
        payment = {"pending_amount": pending, "is_paid": pending == 0}

    return replace(
        player,
        field_consumption=field_consumption,
        bar_consumption=[replace(item) for item in player.bar_consumption],
        total_field=total_field,
        total_bar=total_bar,
        total_general=total_general,
        **payment,
    )


class BillingCalculator:
    """Consumption edits bound to one pricing table.

    Each method takes a player and the court it plays on and returns the
    edited, recomputed player.
    """

    def __init__(self, pricing: PricingTable):
        self.pricing = pricing

    def recompute(self, player: Player, court: Court) -> Player:
        return recompute_totals(player, court, self.pricing)

    def _with_field(self, player: Player, court: Court, **changes) -> Player:
        consumption: FieldConsumption = replace(player.field_consumption, **changes)
        return self.recompute(replace(player, field_consumption=consumption), court)

    def set_owner(self, player: Player, court: Court, is_owner: bool) -> Player:
        return self.recompute(replace(player, is_owner=is_owner), court)

    def set_court_share(self, player: Player, court: Court, shares: int) -> Player:
        self.pricing.check_court_share(shares)
        return self._with_field(player, court, court_share=shares)

    def set_tube_share(self, player: Player, court: Court, shares: int) -> Player:
        self.pricing.check_tube_share(shares)
        return self._with_field(player, court, tube_share=shares)

    def set_overgrip(self, player: Player, court: Court, selected: bool) -> Player:
        return self._with_field(
            player, court, overgrip=self.pricing.overgrip_price if selected else 0.0
        )

    def add_bar_item(self, player: Player, court: Court, product_name: str) -> Player:
        """Add one unit of a product; a product already on the tab gets its quantity bumped."""
        product = self.pricing.get_product(product_name)
        items = [replace(item) for item in player.bar_consumption]
        for item in items:
            if item.name == product.name:
                item.quantity += 1
                break
        else:
            items.append(BarItem(name=product.name, price=product.price))
        return self.recompute(replace(player, bar_consumption=items), court)

    def update_bar_item_quantity(self, player: Player, court: Court, item_id: str, quantity: int) -> Player:
        """Set a line's quantity; zero or less removes the line."""
        if not any(item.id == item_id for item in player.bar_consumption):
            raise NotFoundError(
                f"Bar item {item_id} not found for player {player.id}",
                {"player_id": player.id, "item_id": item_id}
            )
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError("Quantity must be an integer", {"quantity": quantity})

        if quantity <= 0:
            items = [replace(item) for item in player.bar_consumption if item.id != item_id]
        else:
            items = [
                replace(item, quantity=quantity) if item.id == item_id else replace(item)
                for item in player.bar_consumption
            ]
        return self.recompute(replace(player, bar_consumption=items), court)

    def remove_bar_item(self, player: Player, court: Court, item_id: str) -> Player:
        return self.update_bar_item_quantity(player, court, item_id, 0)
