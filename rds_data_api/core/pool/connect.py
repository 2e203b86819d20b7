"""
MySQL connection helpers (PyMySQL).

Connection parameters come from settings.DATABASE_URL; timeouts from
DATABASE_CONNECT_TIMEOUT / DATABASE_READ_TIMEOUT.
"""

from collections.abc import Sequence
from typing import Any

import pymysql

from rds_data_api.core.config import settings

# PyMySQL interpolates arguments with ``%``
DRIVER_PARAMSTYLE = "format"


def connect(**overrides: Any) -> pymysql.connections.Connection:
    """
    Open a new connection to the configured MySQL server.

    Autocommit stays off: every request runs in one transaction that the caller
    commits or rolls back. Keyword overrides replace the parsed DATABASE_URL parts.
    """
    params: dict[str, Any] = dict(settings.database_connect_args)
    params.update(overrides)
    return pymysql.connect(
        host=params["host"],
        port=int(params["port"]),
        user=params["user"],
        password=params["password"] or "",
        database=params["database"],
        connect_timeout=settings.DATABASE_CONNECT_TIMEOUT,
        read_timeout=settings.DATABASE_READ_TIMEOUT,
        charset="utf8mb4",
        autocommit=False,
    )


def execute(conn: Any, sql: str, params: Sequence[Any] | None = None) -> Any:
    """
    Execute SQL and return the cursor. Caller reads rows or ``cursor.rowcount``.

    When *params* is given (even empty), *sql* must be in the driver's ``format``
    paramstyle: ``%s`` placeholders and ``%%`` for a literal percent sign.
    """
    cur = conn.cursor()
    try:
        if params is not None:
            cur.execute(sql, tuple(params))
        else:
            cur.execute(sql)
    except Exception:
        cur.close()
        raise
    return cur


def quote_identifier(name: str) -> str:
    """Backtick-quote a MySQL identifier (embedded backticks doubled)."""
    return "`" + name.replace("`", "``") + "`"
