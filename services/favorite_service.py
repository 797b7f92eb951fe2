"""
services/favorite_service.py
----------------------------
Business logic for users' favorite races.
"""

from typing import Optional

from models.race import Race
from repositories.favorite_repo import FavoriteRepository
from repositories.race_repo import RaceRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class FavoriteError(Exception):
    """A favorite operation failed; the message is safe to show to the user."""


class FavoriteService:
    """Adds, removes and lists favorites keyed by Telegram user ID."""

    def __init__(
        self,
        favorite_repo: Optional[FavoriteRepository] = None,
        user_repo: Optional[UserRepository] = None,
        race_repo: Optional[RaceRepository] = None,
    ):
        self.favorite_repo = favorite_repo or FavoriteRepository()
        self.user_repo = user_repo or UserRepository()
        self.race_repo = race_repo or RaceRepository()

    def _user_id(self, telegram_id: str) -> int:
        user = self.user_repo.get_by_telegram_id(str(telegram_id))
        if not user:
            raise FavoriteError("Usuário não encontrado. Use /start para se cadastrar.")
        return user.id

    def add_favorite(self, telegram_id: str, race_id: str) -> Race:
        """
        Favorite a race.

        Raises:
            FavoriteError: Unknown user or race, or the race is already a favorite.
        """
        user_id = self._user_id(telegram_id)
        race = self.race_repo.get_by_id(race_id)
        if not race:
            raise FavoriteError("Corrida não encontrada.")
        if not self.favorite_repo.add(user_id, int(race.id)):
            raise FavoriteError("Esta corrida já está nos seus favoritos.")
        return race

    def remove_favorite(self, telegram_id: str, race_id: str) -> None:
        """
        Raises:
            FavoriteError: Unknown user, or the race was not a favorite.
        """
        user_id = self._user_id(telegram_id)
        try:
            pk = int(race_id)
        except ValueError:
            raise FavoriteError("Corrida não encontrada.") from None
        if not self.favorite_repo.remove(user_id, pk):
            raise FavoriteError("Esta corrida não está nos seus favoritos.")

    def get_favorite_races(self, telegram_id: str) -> list[Race]:
        """The user's favorites; [] for unknown users."""
        user = self.user_repo.get_by_telegram_id(str(telegram_id))
        if not user:
            return []
        return self.favorite_repo.get_races(user.id)
