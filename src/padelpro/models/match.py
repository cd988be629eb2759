"""
Match model: a court booking with a fixed four-slot roster.
"""

from dataclasses import dataclass, field
from typing import Any

from padelpro.exceptions import NotFoundError, ValidationError
from padelpro.models.player import Player
from padelpro.utils.id_utils import generate_id
from padelpro.utils.time_utils import add_minutes_to_time

ROSTER_SIZE = 4


def _empty_roster() -> list[Player]:
    return [Player() for _ in range(ROSTER_SIZE)]


@dataclass
class Match:
    """Court reservation.

    ``date`` is an ISO day (``YYYY-MM-DD``) and ``time`` a ``HH:MM`` start.
    The roster always holds exactly four slots; names and consumption fill
    them in but slots are never added or removed.
    """
    court_id: int
    responsible: str
    date: str
    time: str
    duration: int = 90
    players: list[Player] = field(default_factory=_empty_roster)
    is_completed: bool = False
    id: str = field(default_factory=generate_id)

    def __post_init__(self) -> None:
        if len(self.players) != ROSTER_SIZE:
            raise ValidationError(
                f"A match has exactly {ROSTER_SIZE} player slots",
                {"match_id": self.id, "slots": len(self.players)}
            )

    @property
    def end_time(self) -> str:
        return add_minutes_to_time(self.time, self.duration)

    @property
    def named_players(self) -> list[Player]:
        return [player for player in self.players if player.is_named]

    @property
    def pending_total(self) -> float:
        """Aggregate amount still owed by the named players."""
        return sum(player.outstanding for player in self.named_players)

    @property
    def total_general(self) -> float:
        return sum(player.total_general for player in self.named_players)

    def player_index(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise NotFoundError(
            f"Player {player_id} not found in match {self.id}",
            {"match_id": self.id, "player_id": player_id}
        )

    def get_player(self, player_id: str) -> Player:
        return self.players[self.player_index(player_id)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "courtId": self.court_id,
            "responsible": self.responsible,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "players": [player.to_dict() for player in self.players],
            "isCompleted": self.is_completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Match":
        return cls(
            id=str(data["id"]),
            court_id=int(data["courtId"]),
            responsible=str(data.get("responsible", "")),
            date=str(data["date"]),
            time=str(data["time"]),
            duration=int(data.get("duration", 90)),
            players=[Player.from_dict(player) for player in data.get("players", [])],
            is_completed=bool(data.get("isCompleted", False)),
        )
