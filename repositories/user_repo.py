"""
repositories/user_repo.py
--------------------------
Data access layer for user records and their preferences.
"""

from typing import Optional

from psycopg2.extras import RealDictCursor

from db.connection import transaction
from models.user import User, UserPreferences
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for CRUD operations on the users and user_preferences tables."""

    def ensure_user(self, telegram_id: str, name: str, username: Optional[str] = None) -> User:
        """
        Insert a user if they don't exist, or refresh name/username of the existing one.
        Uses PostgreSQL's ON CONFLICT (upsert) for atomicity.
        """
        sql = """
            INSERT INTO users (telegram_id, name, username)
            VALUES (%s, %s, %s)
            ON CONFLICT (telegram_id) DO UPDATE
                SET name = EXCLUDED.name, username = EXCLUDED.username, is_active = TRUE
            RETURNING id, telegram_id, name, username, is_active, created_at;
        """
        try:
            with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(sql, (telegram_id, name, username))
                return self._row_to_user(cur.fetchone())
        except Exception as e:
            logger.error(f"Failed to ensure user {telegram_id}: {e}")
            raise

    def get_by_telegram_id(self, telegram_id: str) -> Optional[User]:
        """Fetch a user by their Telegram ID, or None."""
        sql = """
            SELECT id, telegram_id, name, username, is_active, created_at
            FROM users WHERE telegram_id = %s;
        """
        with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, (telegram_id,))
            row = cur.fetchone()
        return self._row_to_user(row) if row else None

    # ── PREFERENCES ───────────────────────────────────────

    def get_preferences(self, user_id: int) -> Optional[UserPreferences]:
        sql = """
            SELECT id, user_id, preferred_distances, notifications_enabled, reminder_days
            FROM user_preferences WHERE user_id = %s;
        """
        with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, (user_id,))
            row = cur.fetchone()
        return self._row_to_preferences(row) if row else None

    def save_preferences(self, prefs: UserPreferences) -> UserPreferences:
        """Insert or replace the preferences row of `prefs.user_id`."""
        sql = """
            INSERT INTO user_preferences (user_id, preferred_distances, notifications_enabled, reminder_days)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (user_id) DO UPDATE SET
                preferred_distances = EXCLUDED.preferred_distances,
                notifications_enabled = EXCLUDED.notifications_enabled,
                reminder_days = EXCLUDED.reminder_days
            RETURNING id, user_id, preferred_distances, notifications_enabled, reminder_days;
        """
        try:
            with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(sql, (
                    prefs.user_id, prefs.preferred_distances,
                    prefs.notifications_enabled, prefs.reminder_days,
                ))
                return self._row_to_preferences(cur.fetchone())
        except Exception as e:
            logger.error(f"Failed to save preferences for user #{prefs.user_id}: {e}")
            raise

    @staticmethod
    def _row_to_user(row: dict) -> User:
        return User(
            id=row["id"],
            telegram_id=row["telegram_id"],
            name=row["name"],
            username=row["username"],
            is_active=row["is_active"],
            created_at=row["created_at"],
        )

    @staticmethod
    def _row_to_preferences(row: dict) -> UserPreferences:
        return UserPreferences(
            id=row["id"],
            user_id=row["user_id"],
            preferred_distances=list(row["preferred_distances"] or []),
            notifications_enabled=row["notifications_enabled"],
            reminder_days=row["reminder_days"],
        )
