"""
PostgreSQL connection pool for the Storefront backend.

The pool is created once by the process entry point (see api.app lifespan)
via init_database() and handed to repositories through the service container.
Importing this module has no side effects.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import PoolError, ThreadedConnectionPool

from .config import Settings, get_settings
from .exceptions import ConflictError, StoreError

logger = logging.getLogger(__name__)


class Database:
    """
    Thin wrapper around a psycopg2 connection pool.

    Every cursor() block runs in its own transaction: it is committed when the
    block exits normally and rolled back when it raises. The connection always
    goes back to the pool.
    """

    def __init__(self, pool: ThreadedConnectionPool) -> None:
        self._pool = pool

    @contextmanager
    def cursor(self) -> Iterator[RealDictCursor]:
        """
        Borrow a pooled connection and yield a dict-row cursor.

        Raises:
            ConflictError: A constraint (unique, foreign key) rejected the write.
            StoreError: Any other database failure, including pool exhaustion.
        """
        try:
            conn = self._pool.getconn()
        except (PoolError, psycopg2.Error) as e:
            logger.error("Could not acquire database connection: %s", e)
            raise StoreError("Database unavailable") from e

        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                yield cur
            conn.commit()
        except psycopg2.IntegrityError as e:
            self._rollback(conn)
            raise ConflictError(
                "Constraint violation",
                details={
                    "pgcode": e.pgcode,
                    "constraint": getattr(e.diag, "constraint_name", None),
                },
            ) from e
        except psycopg2.Error as e:
            self._rollback(conn)
            logger.error("SQL error (%s): %s", e.pgcode, e)
            raise StoreError("Database operation failed", details={"pgcode": e.pgcode}) from e
        except BaseException:
            self._rollback(conn)
            raise
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    def ping(self) -> bool:
        """Run a trivial query to check connectivity."""
        with self.cursor() as cur:
            cur.execute("SELECT 1 AS ok")
            row = cur.fetchone()
        return bool(row and row["ok"] == 1)

    def close(self) -> None:
        """Close every pooled connection."""
        self._pool.closeall()

    @staticmethod
    def _rollback(conn) -> None:
        if conn.closed:
            return
        try:
            conn.rollback()
        except psycopg2.Error as e:
            logger.warning("Rollback failed: %s", e)


# Process-wide handle, set by init_database()
_database: Optional[Database] = None


def init_database(settings: Optional[Settings] = None) -> Database:
    """
    Create the connection pool.

    Call once from the process entry point. Calling again returns the
    existing instance.

    Raises:
        RuntimeError: If STOREFRONT_DATABASE_URL is not set.
        StoreError: If the initial connections cannot be opened.
    """
    global _database

    if _database is not None:
        return _database

    settings = settings or get_settings()
    if not settings.database_url:
        raise RuntimeError(
            "Database configuration missing. "
            "Set the STOREFRONT_DATABASE_URL environment variable."
        )

    try:
        pool = ThreadedConnectionPool(
            settings.db_pool_min,
            settings.db_pool_max,
            dsn=settings.database_url,
        )
    except psycopg2.Error as e:
        logger.error("Failed to create connection pool: %s", e)
        raise StoreError("Database unavailable") from e

    _database = Database(pool)
    logger.info(
        "Database pool ready (min=%d, max=%d)",
        settings.db_pool_min,
        settings.db_pool_max,
    )
    return _database


def get_database() -> Database:
    """
    Get the initialized database handle.

    Raises:
        RuntimeError: If init_database() has not been called.
    """
    if _database is None:
        raise RuntimeError("Database not initialized. Call init_database() at startup.")
    return _database


def close_database() -> None:
    """Close the pool and forget the handle."""
    global _database
    if _database is not None:
        _database.close()
        _database = None
