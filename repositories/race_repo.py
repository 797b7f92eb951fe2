"""
repositories/race_repo.py
-------------------------
Data access layer for races.
All SQL queries related to the `races` table live here.
"""

from datetime import date
from typing import Optional

from psycopg2.extras import RealDictCursor

from db.connection import transaction
from models.race import Race, RaceStatus
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (
    "id, title, organization, distances, distances_numbers, date, "
    "location, link, time, status, created_at, updated_at"
)


def _to_pk(race_id: str) -> Optional[int]:
    """Race IDs travel as strings; the table uses integer keys."""
    try:
        return int(race_id)
    except (TypeError, ValueError):
        return None


class RaceRepository:
    """Repository for CRUD operations on the races table."""

    # ── CREATE ────────────────────────────────────────────

    def add(self, race: Race) -> Race:
        """
        Insert a new race.

        Returns:
            The same object with `id` and timestamps populated.
        """
        sql = """
            INSERT INTO races
                (title, organization, distances, distances_numbers, date, location, link, time, status)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id, created_at, updated_at;
        """
        try:
            with transaction() as conn, conn.cursor() as cur:
                cur.execute(sql, (
                    race.title, race.organization, race.distances, race.distances_numbers,
                    race.date, race.location, race.link, race.time, race.status,
                ))
                row = cur.fetchone()
            race.id = str(row[0])
            race.created_at, race.updated_at = row[1], row[2]
            logger.info(f"Added race '{race.title}' #{race.id}")
            return race
        except Exception as e:
            logger.error(f"Failed to add race '{race.title}': {e}")
            raise

    # ── READ ──────────────────────────────────────────────

    def get_by_id(self, race_id: str) -> Optional[Race]:
        """Fetch a single race, or None if the ID is unknown or not numeric."""
        pk = _to_pk(race_id)
        if pk is None:
            return None
        rows = self._fetch(f"SELECT {_COLUMNS} FROM races WHERE id = %s;", (pk,))
        return rows[0] if rows else None

    def get_open(self, today: Optional[date] = None) -> list[Race]:
        """Upcoming races with open registrations."""
        sql = f"""
            SELECT {_COLUMNS} FROM races
            WHERE date >= %s AND status = %s
            ORDER BY date ASC;
        """
        return self._fetch(sql, (today or date.today(), RaceStatus.OPEN))

    def get_by_distances(self, distances: list[int]) -> list[Race]:
        """Races offering at least one of the given distances (array overlap)."""
        sql = f"""
            SELECT {_COLUMNS} FROM races
            WHERE distances_numbers && %s::int[]
            ORDER BY date ASC;
        """
        return self._fetch(sql, (list(distances),))

    def get_by_range(self, start_distance: int, end_distance: int) -> list[Race]:
        """Races offering a distance between start and end (inclusive)."""
        sql = f"""
            SELECT {_COLUMNS} FROM races
            WHERE EXISTS (
                SELECT 1 FROM unnest(distances_numbers) AS d WHERE d BETWEEN %s AND %s
            )
            ORDER BY date ASC;
        """
        return self._fetch(sql, (start_distance, end_distance))

    def get_next(self, today: Optional[date] = None) -> list[Race]:
        """All races scheduled on the nearest upcoming race date."""
        sql = f"""
            SELECT {_COLUMNS} FROM races
            WHERE date = (SELECT MIN(date) FROM races WHERE date >= %s)
            ORDER BY id ASC;
        """
        return self._fetch(sql, (today or date.today(),))

    # ── DELETE ──────────────────────────────────────────

    def delete_all(self) -> int:
        """Remove every race (and, by cascade, every favorite). Returns rows deleted."""
        with transaction() as conn, conn.cursor() as cur:
            cur.execute("DELETE FROM races;")
            deleted = cur.rowcount
        logger.info(f"Deleted {deleted} races.")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    def _fetch(self, sql: str, params: tuple = ()) -> list[Race]:
        with transaction() as conn, conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(sql, params)
            return [self._row_to_race(r) for r in cur.fetchall()]

    @staticmethod
    def _row_to_race(row: dict) -> Race:
        return Race(
            id=str(row["id"]),
            title=row["title"],
            organization=row["organization"],
            distances=list(row["distances"] or []),
            distances_numbers=list(row["distances_numbers"] or []),
            date=row["date"],
            location=row["location"] or "",
            link=row["link"] or "",
            time=row["time"] or "",
            status=row["status"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
