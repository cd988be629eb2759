"""
Match/player ledger: the canonical, ordered collection of matches.
"""

from collections.abc import Callable, Iterable
from copy import deepcopy
from dataclasses import replace
from datetime import date as date_type

from padelpro.exceptions import NotFoundError, ScheduleConflictError, ValidationError
from padelpro.models.catalog import Court, PricingTable
from padelpro.models.match import Match, ROSTER_SIZE
from padelpro.models.player import Player
from padelpro.services.billing import BillingCalculator
from padelpro.services.scheduling import has_overlap
from padelpro.utils.logging_utils import EnhancedLoggerMixin
from padelpro.utils.time_utils import time_to_minutes, to_day

PlayerChange = Callable[[Player, Court], Player]


class MatchLedger(EnhancedLoggerMixin):
    """Owns every match of the session in insertion order.

    Matches handed out by the query methods are copies; the only way to
    change stored state is through the methods below, each of which leaves
    every player's totals in sync with its consumption.
    """

    def __init__(self, pricing: PricingTable, matches: Iterable[Match] | None = None):
        super().__init__()
        self.pricing = pricing
        self.billing = BillingCalculator(pricing)
        self._matches: list[Match] = [deepcopy(match) for match in matches or []]
        self._listeners: list[Callable[[], None]] = []
        self.set_log_context(service="ledger")

    def __len__(self) -> int:
        return len(self._matches)

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after every mutation."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    def _index(self, match_id: str) -> int:
        for index, match in enumerate(self._matches):
            if match.id == match_id:
                return index
        raise NotFoundError(f"Match {match_id} not found", {"match_id": match_id})

    def _validate_slot(self, match: Match) -> Court:
        court = self.pricing.get_court(match.court_id)
        try:
            to_day(match.date)
            time_to_minutes(match.time)
        except ValueError as e:
            raise ValidationError(str(e), {"date": match.date, "time": match.time}) from None
        if match.duration <= 0:
            raise ValidationError("Duration must be positive", {"duration": match.duration})
        if has_overlap(self._matches, match.court_id, match.date, match.time, match.duration, match.id):
            raise ScheduleConflictError(
                f"Court {match.court_id} is already booked at {match.time} on {match.date}",
                {"court_id": match.court_id, "date": match.date, "time": match.time}
            )
        return court

    # Commands

    def create_match(
        self,
        court_id: int,
        date: str,
        start_time: str,
        responsible: str,
        duration: int | None = None
    ) -> Match:
        """Book a court and open a match with four empty slots.

        The first slot is filled with the responsible person's name.

        Raises:
            ValidationError: Blank responsible name or malformed date/time
            ScheduleConflictError: The slot overlaps an existing booking
            NotFoundError: Unknown court
        """
        responsible = (responsible or "").strip()
        if not responsible:
            raise ValidationError("The responsible person is required", {"field": "responsible"})

        players = [Player() for _ in range(ROSTER_SIZE)]
        players[0] = replace(players[0], name=responsible)
        match = Match(
            court_id=court_id,
            responsible=responsible,
            date=date,
            time=start_time,
            duration=duration if duration is not None else self.pricing.default_duration,
            players=players,
        )
        self._validate_slot(match)

        self._matches.append(match)
        self.info("Match created", match_id=match.id, court_id=court_id, date=date, time=start_time)
        self._notify()
        return deepcopy(match)

    def update_match(self, match: Match) -> Match:
        """Replace the stored match with the same id.

        Player totals are recomputed on the way in. A changed court, day or
        time is checked for overlaps against the other bookings.

        Raises:
            NotFoundError: No match with that id
            ScheduleConflictError: The new slot overlaps another booking
        """
        index = self._index(match.id)
        stored = self._matches[index]

        court = self.pricing.get_court(match.court_id)
        if (match.court_id, match.date, match.time, match.duration) != (
            stored.court_id, stored.date, stored.time, stored.duration
        ):
            court = self._validate_slot(match)

        updated = deepcopy(match)
        updated.players = [self.billing.recompute(player, court) for player in updated.players]

        self._matches[index] = updated
        self.debug("Match updated", match_id=match.id)
        self._notify()
        return deepcopy(updated)

    def update_player(self, match_id: str, player_id: str, change: PlayerChange) -> Player:
        """Apply one consumption change to a player as a single step.

        Reads the match, applies ``change(player, court)``, recomputes the
        player's totals and writes the match back. If ``change`` raises,
        nothing is stored.
        """
        match = self.get_match(match_id)
        index = match.player_index(player_id)
        court = self.pricing.get_court(match.court_id)

        updated = self.billing.recompute(change(match.players[index], court), court)
        match.players[index] = updated
        self.update_match(match)
        return deepcopy(updated)

    def rename_player(self, match_id: str, player_id: str, name: str) -> Player:
        return self.update_player(match_id, player_id, lambda player, _court: replace(player, name=name))

    def set_owner(self, match_id: str, player_id: str, is_owner: bool) -> Player:
        return self.update_player(
            match_id, player_id, lambda player, court: self.billing.set_owner(player, court, is_owner)
        )

    def set_court_share(self, match_id: str, player_id: str, shares: int) -> Player:
        return self.update_player(
            match_id, player_id, lambda player, court: self.billing.set_court_share(player, court, shares)
        )

    def set_tube_share(self, match_id: str, player_id: str, shares: int) -> Player:
        return self.update_player(
            match_id, player_id, lambda player, court: self.billing.set_tube_share(player, court, shares)
        )

    def set_overgrip(self, match_id: str, player_id: str, selected: bool) -> Player:
        return self.update_player(
            match_id, player_id, lambda player, court: self.billing.set_overgrip(player, court, selected)
        )

    def add_bar_item(self, match_id: str, player_id: str, product_name: str) -> Player:
        return self.update_player(
            match_id, player_id, lambda player, court: self.billing.add_bar_item(player, court, product_name)
        )

    def update_bar_item_quantity(self, match_id: str, player_id: str, item_id: str, quantity: int) -> Player:
        return self.update_player(
            match_id,
            player_id,
            lambda player, court: self.billing.update_bar_item_quantity(player, court, item_id, quantity)
        )

    def complete_match(self, match_id: str) -> Match:
        """Mark a match completed. Completing it again is a no-op."""
        index = self._index(match_id)
        match = self._matches[index]
        if not match.is_completed:
            match.is_completed = True
            self.info("Match completed", match_id=match_id)
            self._notify()
        return deepcopy(match)

    # Queries

    @property
    def matches(self) -> list[Match]:
        return deepcopy(self._matches)

    def get_match(self, match_id: str) -> Match:
        return deepcopy(self._matches[self._index(match_id)])

    def find_player(self, match_id: str, player_id: str) -> Player:
        return self.get_match(match_id).get_player(player_id)

    def matches_by_date(self, day: str | date_type) -> list[Match]:
        day = to_day(day)
        return [deepcopy(match) for match in self._matches if to_day(match.date) == day]

    def matches_by_court(self, court_id: int) -> list[Match]:
        return [deepcopy(match) for match in self._matches if match.court_id == court_id]

    def active_matches(self) -> list[Match]:
        return [deepcopy(match) for match in self._matches if not match.is_completed]

    def completed_matches(self) -> list[Match]:
        return [deepcopy(match) for match in self._matches if match.is_completed]

    def unpaid_players(self) -> list[tuple[Match, Player]]:
        """Named players on active matches who still owe something."""
        return [
            (match, player)
            for match in self.active_matches()
            for player in match.named_players
            if not player.is_paid and player.total_general > 0
        ]
