"""
Scheduling validator: detects overlapping bookings on a court.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from padelpro.models.match import Match
from padelpro.utils.time_utils import add_minutes_to_time, minutes_to_time, time_to_minutes

SLOT_GRID_START = "09:00"
SLOT_GRID_LAST_START = "23:00"


@dataclass(frozen=True)
class TimeSlot:
    """A bookable start time on the slot grid."""
    time: str
    end_time: str
    blocked: bool

    @property
    def label(self) -> str:
        return f"{self.time} - {self.end_time}"


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Half-open ``[start, end)`` intervals overlap; touching ends do not."""
    return start1 < end2 and start2 < end1


def has_overlap(
    matches: Iterable[Match],
    court_id: int,
    date: str,
    start_time: str,
    duration: int,
    exclude_match_id: str | None = None
) -> bool:
    """Whether a proposed booking collides with an existing one.

    Only matches on the same court and the same day are compared.
    ``exclude_match_id`` lets an edit check ignore the match being edited.
    """
    start = time_to_minutes(start_time)
    end = start + duration

    for match in matches:
        if match.id == exclude_match_id:
            continue
        if match.court_id != court_id or match.date != date:
            continue
        match_start = time_to_minutes(match.time)
        if intervals_overlap(start, end, match_start, match_start + match.duration):
            return True
    return False


def available_time_slots(
    matches: Iterable[Match],
    court_id: int,
    date: str,
    duration: int = 90
) -> list[TimeSlot]:
    """The start-time grid for one court and day.

    Slots run every ``duration`` minutes from 09:00, the last one starting no
    later than 23:00. Slots that would overlap an existing booking are
    flagged as blocked.
    """
    matches = list(matches)
    slots = []
    current = time_to_minutes(SLOT_GRID_START)
    last_start = time_to_minutes(SLOT_GRID_LAST_START)
    while current <= last_start:
        start_time = minutes_to_time(current)
        slots.append(TimeSlot(
            time=start_time,
            end_time=add_minutes_to_time(start_time, duration),
            blocked=has_overlap(matches, court_id, date, start_time, duration),
        ))
        current += duration
    return slots
