"""
models/user.py
--------------
Domain models for bot users and their preferences.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """A Telegram user known to the bot."""
    telegram_id: str
    name: str
    username: Optional[str] = None
    is_active: bool = True
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass
class UserPreferences:
    """
    Per-user settings changed through /config.

    Attributes:
        user_id: Internal user ID (users.id).
        preferred_distances: Distances in km used for recommendations.
        notifications_enabled: Whether new-race alerts are sent.
        reminder_days: Days before a race to send the reminder.
    """
    user_id: int
    preferred_distances: list[int] = field(default_factory=list)
    notifications_enabled: bool = True
    reminder_days: int = 3
    id: Optional[int] = None
