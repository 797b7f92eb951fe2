"""
services/race_service.py
------------------------
Business logic for browsing and filtering races.
"""

from typing import Optional

from models.race import Race
from repositories.race_repo import RaceRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class RaceService:
    """Read-side queries used by the race commands and callbacks."""

    def __init__(self, repo: Optional[RaceRepository] = None):
        self.repo = repo or RaceRepository()

    def get_available_races(self) -> list[Race]:
        """Upcoming races with open registrations, soonest first."""
        return self.repo.get_open()

    def get_race_by_id(self, race_id: str) -> Optional[Race]:
        return self.repo.get_by_id(race_id)

    def get_races_by_distances(self, distances: list[int]) -> list[Race]:
        """Races offering any of `distances` (km). Empty input yields no races."""
        if not distances:
            return []
        return self.repo.get_by_distances(distances)

    def get_races_by_range(self, start_distance: int, end_distance: int) -> list[Race]:
        """Races with a distance in [start, end]; bounds are swapped if reversed."""
        if start_distance > end_distance:
            start_distance, end_distance = end_distance, start_distance
        return self.repo.get_by_range(start_distance, end_distance)

    def get_next_races(self) -> list[Race]:
        """All races on the nearest upcoming date ([] if none)."""
        return self.repo.get_next()
