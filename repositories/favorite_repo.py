"""
repositories/favorite_repo.py
-----------------------------
Data access layer for the `favorite_races` join table.
"""

from psycopg2.extras import RealDictCursor

from db.connection import transaction
from models.race import Race
from repositories.race_repo import RaceRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class FavoriteRepository:
    """Links users (users.id) to races (races.id)."""

    def add(self, user_id: int, race_id: int) -> bool:
        """
        Mark a race as favorite.

        Returns:
            True if a new link was created, False if it already existed.
        """
        sql = """
            INSERT INTO favorite_races (user_id, race_id)
            VALUES (%s, %s)
            ON CONFLICT (user_id, race_id) DO NOTHING;
        """
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (user_id, race_id))
            created = cur.rowcount > 0
        if created:
            logger.info(f"User #{user_id} favorited race #{race_id}")
        return created

    def remove(self, user_id: int, race_id: int) -> bool:
        """Returns True if the link existed and was removed."""
        sql = "DELETE FROM favorite_races WHERE user_id = %s AND race_id = %s;"
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(sql, (user_id, race_id))
            return cur.rowcount > 0

    def get_races(self, user_id: int) -> list[Race]:
        """The user's favorite races, soonest first."""
        sql = """
            SELECT r.* FROM races r
            JOIN favorite_races f ON f.race_id = r.id
            WHERE f.user_id = %s
            ORDER BY r.date ASC;
        """
        with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, (user_id,))
            return [RaceRepository._row_to_race(r) for r in cur.fetchall()]

    def delete_all(self) -> int:
        with transaction() as conn, conn.cursor() as cur:
            cur.execute("DELETE FROM favorite_races;")
            return cur.rowcount
