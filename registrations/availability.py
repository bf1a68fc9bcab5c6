# registrations/availability.py
"""
Camp availability.

A camp is full when its confirmed registrations reach its capacity.
Pending registrations and registrations awaiting manual verification
do not hold a slot.
"""

from dataclasses import dataclass

from camps.models import Camp
from .models import Registration


@dataclass(frozen=True)
class Availability:
    """
    Snapshot of a camp's capacity usage.

    Attributes
    ----------
    is_full : bool
        No slot left.
    available_spots : int
        Remaining slots, never negative.
    confirmed_count : int
        Registrations currently confirmed.
    max_players : int
        The camp's capacity.
    """

    is_full: bool
    available_spots: int
    confirmed_count: int
    max_players: int

    def as_dict(self) -> dict:
        return {
            "isFull": self.is_full,
            "availableSpots": self.available_spots,
            "confirmedCount": self.confirmed_count,
            "maxPlayers": self.max_players,
        }


def confirmed_count(camp: Camp) -> int:
    """Number of confirmed registrations for ``camp``."""
    return Registration.objects.filter(
        camp=camp, status=Registration.Status.CONFIRMED
    ).count()


def check_availability(camp: Camp) -> Availability:
    """
    Compare the camp's confirmed registrations against its capacity.

    Has no side effects. Callers that go on to write must call it
    again at write time rather than trust an earlier result.
    """
    count = confirmed_count(camp)
    max_players = camp.max_players
    return Availability(
        is_full=count >= max_players,
        available_spots=max(0, max_players - count),
        confirmed_count=count,
        max_players=max_players,
    )
