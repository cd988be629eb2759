"""Tests for the match ledger."""

import pytest

from padelpro.exceptions import (
    NotFoundError,
    ScheduleConflictError,
    ValidationError,
)
from padelpro.services.ledger import MatchLedger

MATCH_DAY = "2024-05-10"


def test_create_match_fills_responsible_slot(ledger, match):
    """Test a new match opens with four slots and the responsible first."""
    assert len(match.players) == 4
    assert match.players[0].name == "Ana"
    assert all(not player.name for player in match.players[1:])
    assert match.duration == 90
    assert match.end_time == "10:30"
    assert not match.is_completed
    assert len(ledger) == 1

def test_create_match_requires_responsible(ledger):
    with pytest.raises(ValidationError):
        ledger.create_match(1, MATCH_DAY, "09:00", "   ")
    assert len(ledger) == 0

def test_create_match_unknown_court(ledger):
    with pytest.raises(NotFoundError):
        ledger.create_match(99, MATCH_DAY, "09:00", "Ana")

def test_create_match_malformed_time(ledger):
    with pytest.raises(ValidationError):
        ledger.create_match(1, MATCH_DAY, "25:00", "Ana")
    with pytest.raises(ValidationError):
        ledger.create_match(1, "10/05/2024", "09:00", "Ana")

def test_overlapping_booking_rejected(ledger, match):
    with pytest.raises(ScheduleConflictError) as exc_info:
        ledger.create_match(1, MATCH_DAY, "10:00", "Bruno")

    assert isinstance(exc_info.value, ValidationError)
    assert len(ledger) == 1

def test_back_to_back_bookings_allowed(ledger, match):
    ledger.create_match(1, MATCH_DAY, "10:30", "Bruno")
    ledger.create_match(2, MATCH_DAY, "09:00", "Carla")
    assert len(ledger) == 3

def test_returned_matches_are_copies(ledger, match):
    copy = ledger.get_match(match.id)
    copy.players[1].name = "Intruder"
    copy.responsible = "Nobody"

    stored = ledger.get_match(match.id)
    assert stored.players[1].name == ""
    assert stored.responsible == "Ana"

def test_update_player_recomputes_totals(ledger, match):
    player_id = match.players[0].id

    ledger.set_court_share(match.id, player_id, 4)
    ledger.set_tube_share(match.id, player_id, 4)
    player = ledger.add_bar_item(match.id, player_id, "Birra")

    assert player.total_field == 12.5 + 1.5
    assert player.total_bar == 2.5
    assert ledger.find_player(match.id, player_id).total_general == 16.5

def test_failed_change_leaves_state_untouched(ledger, match):
    player_id = match.players[0].id
    ledger.set_court_share(match.id, player_id, 2)

    with pytest.raises(ValidationError):
        ledger.set_court_share(match.id, player_id, 7)

    assert ledger.find_player(match.id, player_id).field_consumption.court_share == 2

def test_update_bar_item_quantity(ledger, match):
    player_id = match.players[0].id
    player = ledger.add_bar_item(match.id, player_id, "Coca Cola")
    item_id = player.bar_consumption[0].id

    player = ledger.update_bar_item_quantity(match.id, player_id, item_id, 3)
    assert player.total_bar == 6.0

    player = ledger.update_bar_item_quantity(match.id, player_id, item_id, 0)
    assert player.bar_consumption == []
    assert player.total_general == 0.0

def test_set_owner_and_overgrip(ledger, match):
    player_id = match.players[1].id
    ledger.rename_player(match.id, player_id, "Bruno")
    ledger.set_court_share(match.id, player_id, 1)
    ledger.set_owner(match.id, player_id, True)
    player = ledger.set_overgrip(match.id, player_id, True)

    assert player.name == "Bruno"
    assert player.is_owner
    assert player.total_field == 12.5

def test_update_match_moves_slot(ledger, match):
    other = ledger.create_match(1, MATCH_DAY, "12:00", "Bruno")

    moved = ledger.get_match(match.id)
    moved.time = "10:30"
    ledger.update_match(moved)
    assert ledger.get_match(match.id).time == "10:30"

    clash = ledger.get_match(other.id)
    clash.time = "11:00"
    with pytest.raises(ScheduleConflictError):
        ledger.update_match(clash)
    assert ledger.get_match(other.id).time == "12:00"

def test_update_match_recomputes_on_court_change(ledger, match):
    player_id = match.players[0].id
    ledger.set_court_share(match.id, player_id, 1)

    moved = ledger.get_match(match.id)
    moved.court_id = 5
    ledger.update_match(moved)

    assert ledger.find_player(match.id, player_id).field_consumption.court_amount == 40.0

def test_update_unknown_match(ledger, match):
    copy = ledger.get_match(match.id)
    copy.id = "missing"
    with pytest.raises(NotFoundError):
        ledger.update_match(copy)

def test_unknown_player(ledger, match):
    with pytest.raises(NotFoundError):
        ledger.set_court_share(match.id, "missing", 4)

def test_complete_match_is_idempotent(ledger, match):
    calls = []
    ledger.subscribe(lambda: calls.append(1))

    assert ledger.complete_match(match.id).is_completed
    assert ledger.complete_match(match.id).is_completed
    assert len(calls) == 1

    assert ledger.active_matches() == []
    assert [m.id for m in ledger.completed_matches()] == [match.id]

def test_listeners_fire_on_mutations(ledger):
    calls = []
    ledger.subscribe(lambda: calls.append(1))

    created = ledger.create_match(3, MATCH_DAY, "18:00", "Ana")
    ledger.rename_player(created.id, created.players[1].id, "Bruno")
    assert len(calls) == 2

def test_queries(ledger, match):
    ledger.create_match(2, MATCH_DAY, "09:00", "Bruno")
    ledger.create_match(1, "2024-05-11", "09:00", "Carla")

    assert [m.responsible for m in ledger.matches_by_date(MATCH_DAY)] == ["Ana", "Bruno"]
    assert [m.responsible for m in ledger.matches_by_court(1)] == ["Ana", "Carla"]
    assert [m.responsible for m in ledger.matches] == ["Ana", "Bruno", "Carla"]

def test_unpaid_players_skip_empty_and_zero(ledger, match):
    player_id = match.players[0].id
    ledger.set_court_share(match.id, player_id, 4)
    ledger.rename_player(match.id, match.players[1].id, "Bruno")

    unpaid = ledger.unpaid_players()
    assert [(m.id, p.name) for m, p in unpaid] == [(match.id, "Ana")]

def test_loaded_matches_are_copied(pricing, match):
    ledger = MatchLedger(pricing, [match])
    match.responsible = "Changed"
    assert ledger.get_match(match.id).responsible == "Ana"
