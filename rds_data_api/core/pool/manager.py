"""
Connection pool for the configured MySQL server.

Reuses connections across requests to avoid a connect per call. Includes
health-check on checkout, max-age eviction, and thread-safe singleton
initialisation. A checked-out connection is owned by exactly one request
until it is released. A pooled connection always has the configured default
database selected (or none, when DATABASE_URL names no database).
"""

import logging
import threading
import time
from typing import Any, NamedTuple

from rds_data_api.core.config import settings

from .connect import connect, execute, quote_identifier

logger = logging.getLogger(__name__)

_PING_IDLE_THRESHOLD = 30.0  # only ping connections idle longer than this (seconds)


class _PoolEntry(NamedTuple):
    conn: Any
    created_at: float  # time.monotonic() when the connection was opened
    last_used: float   # time.monotonic() when last returned to pool


class PoolManager:
    """Connection pool with health-check and max-age."""

    def __init__(
        self,
        *,
        pool_size: int | None = None,
        max_age: float | None = None,
        default_database: str | None = None,
    ) -> None:
        self._idle: list[_PoolEntry] = []
        self._created: dict[int, float] = {}
        self._lock = threading.Lock()
        self._pool_size: int = (
            pool_size if pool_size is not None else settings.DATABASE_POOL_SIZE
        )
        self._max_age: float = float(
            max_age if max_age is not None else settings.DATABASE_POOL_MAX_AGE_SEC
        )
        self._default_database: str | None = (
            default_database
            if default_database is not None
            else settings.database_connect_args["database"]
        ) or None

    def get_connection(self) -> Any:
        """Get a healthy connection (from pool or freshly opened)."""
        now = time.monotonic()
        while True:
            entry = self._pop()
            if entry is None:
                break
            if self._is_expired(entry):
                self._discard(entry.conn)
                continue
            idle_sec = now - entry.last_used
            if idle_sec > _PING_IDLE_THRESHOLD and not self._is_alive(entry.conn):
                self._discard(entry.conn)
                continue
            try:
                entry.conn.rollback()
            except Exception:
                self._discard(entry.conn)
                continue
            return entry.conn

        conn = connect()
        with self._lock:
            self._created[id(conn)] = time.monotonic()
        logger.debug("Opened new database connection")
        return conn

    def release(self, conn: Any, *, reset_database: bool = False) -> None:
        """
        Return a connection to the pool (or close it if pool is full).

        Pass ``reset_database=True`` when the request ran ``USE`` on the
        connection. The default database is selected again before the
        connection is pooled; without a default the connection is closed.
        """
        try:
            conn.rollback()
        except Exception:
            logger.debug("Rollback on release failed; closing connection", exc_info=True)
            self._discard(conn)
            return

        if reset_database and not self._restore_database(conn):
            self._discard(conn)
            return

        with self._lock:
            if len(self._idle) < self._pool_size:
                created_at = self._created.get(id(conn), time.monotonic())
                self._idle.append(
                    _PoolEntry(conn=conn, created_at=created_at, last_used=time.monotonic())
                )
                return

        self._discard(conn)

    def dispose(self) -> None:
        """Close all idle connections."""
        with self._lock:
            entries = list(self._idle)
            self._idle.clear()
        for e in entries:
            self._discard(e.conn)

    def stats(self) -> dict[str, int]:
        """Return pool statistics for monitoring."""
        with self._lock:
            return {
                "idle_connections": len(self._idle),
                "open_connections": len(self._created),
            }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _pop(self) -> _PoolEntry | None:
        with self._lock:
            if self._idle:
                return self._idle.pop()
        return None

    def _is_expired(self, entry: _PoolEntry) -> bool:
        return (time.monotonic() - entry.created_at) > self._max_age

    @staticmethod
    def _is_alive(conn: Any) -> bool:
        """Lightweight ping: attempt a no-op query to detect broken connections."""
        try:
            cur = conn.cursor()
            cur.execute("SELECT 1")
            cur.close()
            return True
        except Exception:
            return False

    def _restore_database(self, conn: Any) -> bool:
        if not self._default_database:
            # MySQL has no way to deselect a database once USE has run
            return False
        try:
            execute(conn, f"USE {quote_identifier(self._default_database)}").close()
        except Exception:
            logger.debug("Could not restore default database; closing connection", exc_info=True)
            return False
        return True

    def _discard(self, conn: Any) -> None:
        with self._lock:
            self._created.pop(id(conn), None)
        try:
            conn.close()
        except Exception:
            logger.debug("Error closing database connection", exc_info=True)


_pool_manager: PoolManager | None = None
_pool_lock = threading.Lock()


def get_pool_manager() -> PoolManager:
    """Return the singleton PoolManager (thread-safe double-checked locking)."""
    global _pool_manager
    if _pool_manager is None:
        with _pool_lock:
            if _pool_manager is None:
                _pool_manager = PoolManager()
    return _pool_manager
