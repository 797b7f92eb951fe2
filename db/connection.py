"""
db/connection.py
----------------
Process-wide psycopg2 connection pool plus the `transaction()` helper
every repository goes through.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extensions import connection as PgConnection
from psycopg2.pool import SimpleConnectionPool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: Optional[SimpleConnectionPool] = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Open the pool (once; later calls are ignored).

    Raises:
        psycopg2.OperationalError: The database cannot be reached.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
    except psycopg2.OperationalError as e:
        logger.error(f"Could not connect to PostgreSQL: {e}")
        raise
    logger.info(f"PostgreSQL pool ready ({min_conn}-{max_conn} connections).")


def get_connection() -> PgConnection:
    if _pool is None:
        raise RuntimeError("init_pool() must be called before using the database.")
    return _pool.getconn()


def release_connection(conn: PgConnection) -> None:
    if _pool is not None:
        _pool.putconn(conn)


@contextmanager
def transaction() -> Iterator[PgConnection]:
    """
    Borrow a pooled connection for one unit of work.

    Usage:
        with transaction() as conn, conn.cursor() as cur:
            cur.execute(...)

    Commits on success; on any exception rolls back and re-raises.
    The connection always goes back to the pool.
    """
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        release_connection(conn)


def close_pool() -> None:
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("PostgreSQL pool closed.")
