"""
models/race.py
--------------
Domain model for running races.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


class RaceStatus:
    """Allowed values for `Race.status`."""
    OPEN = "open"
    CLOSED = "closed"
    COMING_SOON = "coming_soon"
    CANCELLED = "cancelled"


@dataclass
class Race:
    """
    Represents a single race event.

    Attributes:
        id: Database primary key as a string (None for new records).
        title: Race name.
        organization: Organizer.
        distances: Display labels, e.g. ['5km', '10km'].
        distances_numbers: Numeric distances in km, used for filtering.
        date: Race day.
        location: Free-text venue.
        link: Registration URL.
        time: Start time label, e.g. '07:00'.
        status: One of RaceStatus.
    """
    title: str
    organization: str
    date: date
    distances: list[str] = field(default_factory=list)
    distances_numbers: list[int] = field(default_factory=list)
    location: str = ""
    link: str = ""
    time: str = ""
    status: str = RaceStatus.OPEN
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_distance_in(self, distances: list[int]) -> bool:
        """True if any of this race's distances is in `distances`."""
        return any(d in distances for d in self.distances_numbers)

    def has_distance_between(self, start: int, end: int) -> bool:
        """True if any of this race's distances falls in [start, end]."""
        return any(start <= d <= end for d in self.distances_numbers)

    def is_open(self, today: Optional[date] = None) -> bool:
        """True if registrations are open and the race has not happened yet."""
        today = today or date.today()
        return self.date >= today and self.status == RaceStatus.OPEN
