"""
services/user_service.py
------------------------
User registration and /config preferences.
"""

from typing import Optional

from models.user import User, UserPreferences
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class UserNotFoundError(LookupError):
    """Raised when preferences are updated for a user that never registered."""


class UserService:
    """Registers users and reads/writes their preferences."""

    def __init__(self, repo: Optional[UserRepository] = None):
        self.repo = repo or UserRepository()

    def register_user(self, telegram_id: str, name: str, username: Optional[str] = None) -> User:
        """Create the user, or refresh name/username if already known."""
        user = self.repo.ensure_user(str(telegram_id), name, username)
        logger.debug(f"Registered user {telegram_id} as #{user.id}")
        return user

    def get_user(self, telegram_id: str) -> Optional[User]:
        return self.repo.get_by_telegram_id(str(telegram_id))

    def get_user_preferences(self, telegram_id: str) -> Optional[UserPreferences]:
        """The user's preferences, or None if the user or the row is missing."""
        user = self.get_user(telegram_id)
        if not user:
            return None
        return self.repo.get_preferences(user.id)

    def update_user_preferences(
        self,
        telegram_id: str,
        preferred_distances: Optional[list[int]] = None,
        notifications_enabled: Optional[bool] = None,
        reminder_days: Optional[int] = None,
    ) -> UserPreferences:
        """
        Change only the given settings, creating the row with defaults first if needed.

        Raises:
            UserNotFoundError: If the user never registered.
        """
        user = self.get_user(telegram_id)
        if not user:
            raise UserNotFoundError(f"User {telegram_id} not found")

        prefs = self.repo.get_preferences(user.id) or UserPreferences(user_id=user.id)
        if preferred_distances is not None:
            prefs.preferred_distances = preferred_distances
        if notifications_enabled is not None:
            prefs.notifications_enabled = notifications_enabled
        if reminder_days is not None:
            prefs.reminder_days = reminder_days

        saved = self.repo.save_preferences(prefs)
        logger.info(f"Updated preferences for user {telegram_id}")
        return saved
