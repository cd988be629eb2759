"""Tests for the data models."""

from datetime import datetime, timezone

import pytest

from padelpro.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)
from padelpro.models.catalog import CourtCategory
from padelpro.models.match import Match
from padelpro.models.payment import PaymentMethod, PaymentTransaction
from padelpro.models.player import BarItem, FieldConsumption, Player


class TestPaymentTransaction:
    """Test transaction invariants."""

    def test_card_transaction(self):
        transaction = PaymentTransaction("p1", "Ana", 12.5, PaymentMethod.CARD)
        assert transaction.cash_received is None
        assert transaction.change is None
        assert not transaction.is_full_match

    def test_cash_change_is_derived(self):
        transaction = PaymentTransaction(
            "p1", "Ana", 12.5, PaymentMethod.CASH, cash_received=20.0, change=99.0
        )
        assert transaction.change == 7.5

    @pytest.mark.parametrize("amount", [0, -1])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(InvalidAmountError):
            PaymentTransaction("p1", "Ana", amount, PaymentMethod.CARD)

    def test_cash_must_cover_amount(self):
        with pytest.raises(InsufficientFundsError):
            PaymentTransaction("p1", "Ana", 12.5, PaymentMethod.CASH, cash_received=10.0)
        with pytest.raises(InsufficientFundsError):
            PaymentTransaction("p1", "Ana", 12.5, PaymentMethod.CASH)

    def test_round_trip(self):
        transaction = PaymentTransaction(
            "full-match", "Full match (Ana)", 30.0, PaymentMethod.CASH,
            cash_received=50.0, timestamp=datetime(2024, 5, 10, 11, 0), match_id="m1"
        )
        data = transaction.to_dict()

        assert data["method"] == "cash"
        assert data["timestamp"] == "2024-05-10T11:00:00"
        assert data["change"] == 20.0
        assert PaymentTransaction.from_dict(data) == transaction
        assert transaction.is_full_match

    def test_from_dict_accepts_utc_suffix(self):
        data = PaymentTransaction(
            "p1", "Ana", 12.5, PaymentMethod.CARD, timestamp=datetime(2024, 5, 10, 11, 0)
        ).to_dict()
        data["timestamp"] = "2024-05-10T10:30:00.000Z"

        transaction = PaymentTransaction.from_dict(data)

        expected = datetime(2024, 5, 10, 10, 30, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert transaction.timestamp == expected
        assert transaction.timestamp.tzinfo is None


class TestPaymentMethod:

    @pytest.mark.parametrize("value, expected", [
        ("card", PaymentMethod.CARD),
        ("POS", PaymentMethod.CARD),
        (" Cash ", PaymentMethod.CASH),
        (PaymentMethod.CASH, PaymentMethod.CASH),
    ])
    def test_parse(self, value, expected):
        assert PaymentMethod.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            PaymentMethod.parse("cheque")


class TestPlayer:

    def test_outstanding(self):
        player = Player(name="Ana", total_general=12.5)
        assert player.outstanding == 12.5

        player.pending_amount = 7.5
        assert player.outstanding == 7.5

        player.is_paid = True
        assert player.outstanding == 0.0

    def test_blank_name_is_empty_slot(self):
        assert not Player(name="  ").is_named
        assert Player(name="Ana").is_named

    def test_dict_uses_camel_case(self):
        player = Player(
            id="p1",
            name="Ana",
            field_consumption=FieldConsumption(court_share=4, court_amount=12.5),
            bar_consumption=[BarItem(name="Birra", price=2.5, id="b1")],
            payment_method=PaymentMethod.CARD,
        )
        data = player.to_dict()

        assert data["fieldConsumption"]["courtShare"] == 4
        assert data["barConsumption"] == [{"id": "b1", "name": "Birra", "price": 2.5, "quantity": 1}]
        assert data["paymentMethod"] == "card"
        assert "pendingAmount" not in data
        assert Player.from_dict(data) == player

    def test_amount_paid_round_trip(self):
        player = Player(name="Ana", total_general=12.5, pending_amount=7.5, amount_paid=5.0)
        data = player.to_dict()

        assert data["amountPaid"] == 5.0
        assert Player.from_dict(data) == player

    @pytest.mark.parametrize("status, expected", [
        ({"isPaid": True}, 12.5),
        ({"pendingAmount": 7.5}, 5.0),
        ({}, 0.0),
    ])
    def test_amount_paid_rebuilt_for_old_snapshots(self, status, expected):
        data = Player(name="Ana", total_general=12.5).to_dict()
        del data["amountPaid"]
        data.update(status)

        assert Player.from_dict(data).amount_paid == expected


class TestMatch:

    def test_roster_size_enforced(self):
        with pytest.raises(ValidationError):
            Match(court_id=1, responsible="Ana", date="2024-05-10", time="09:00", players=[Player()])

    def test_end_time(self):
        match = Match(court_id=1, responsible="Ana", date="2024-05-10", time="22:30")
        assert match.end_time == "24:00"

    def test_pending_total_skips_empty_slots(self):
        players = [
            Player(name="Ana", total_general=12.5, pending_amount=7.5),
            Player(name="Bruno", total_general=10.0),
            Player(name="Carla", total_general=5.0, is_paid=True),
            Player(name="", total_general=99.0),
        ]
        match = Match(court_id=1, responsible="Ana", date="2024-05-10", time="09:00", players=players)

        assert match.pending_total == 17.5
        assert match.total_general == 27.5

    def test_get_player_unknown(self):
        match = Match(court_id=1, responsible="Ana", date="2024-05-10", time="09:00")
        with pytest.raises(NotFoundError):
            match.get_player("missing")

    def test_round_trip(self):
        match = Match(court_id=3, responsible="Ana", date="2024-05-10", time="18:00", is_completed=True)
        assert Match.from_dict(match.to_dict()) == match


def test_court_category_aliases():
    assert CourtCategory.parse("interior") is CourtCategory.INDOOR
    assert CourtCategory.parse("Exterior") is CourtCategory.OUTDOOR
    assert CourtCategory.parse("indoor") is CourtCategory.INDOOR


def test_pricing_lookups(pricing):
    assert pricing.get_court(5).category is CourtCategory.OUTDOOR
    assert pricing.court_base_price(pricing.get_court(1)) == 50.0
    assert pricing.get_product("Monster").price == 3.0
    with pytest.raises(NotFoundError):
        pricing.get_court(42)
    with pytest.raises(NotFoundError):
        pricing.get_product("Champagne")
