"""In-memory stand-ins for a PyMySQL connection, its cursors, and the pool."""

from collections.abc import Callable
from typing import Any, NamedTuple

from pymysql.constants import FIELD_TYPE


class FakeResult(NamedTuple):
    description: list[tuple]
    rows: list[tuple]


def col(name: str, type_code: int, length: int = 11) -> tuple:
    """DB-API 7-item description entry, shaped like PyMySQL's."""
    return (name, type_code, None, length, length, 0, True)


PEOPLE_DESCRIPTION = [
    col("id", FIELD_TYPE.LONG),
    col("name", FIELD_TYPE.VAR_STRING, 255),
    col("active", FIELD_TYPE.TINY, 1),
]

# (sql, args) -> FakeResult for a result set, int for a rowcount; may raise
Responder = Callable[[str, Any], "FakeResult | int"]


def _default_responder(sql: str, args: Any) -> FakeResult | int:
    return 0


class FakeCursor:
    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self.description: list[tuple] | None = None
        self.rowcount = -1
        self._rows: list[tuple] = []
        self.closed = False

    def execute(self, sql: str, args: Any = None) -> int:
        self._conn.executed.append((sql, args))
        result = self._conn.responder(sql, args)
        if isinstance(result, FakeResult):
            self.description = result.description
            self._rows = list(result.rows)
            self.rowcount = len(self._rows)
        else:
            self.rowcount = result
        return self.rowcount

    def fetchall(self) -> list[tuple]:
        return list(self._rows)

    def fetchone(self) -> tuple | None:
        return self._rows[0] if self._rows else None

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    def __init__(
        self,
        responder: Responder | None = None,
        *,
        commit_error: Exception | None = None,
    ) -> None:
        self.responder = responder or _default_responder
        self.commit_error = commit_error
        self.executed: list[tuple[str, Any]] = []
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def commit(self) -> None:
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def close(self) -> None:
        self.closed = True


class FakePool:
    def __init__(
        self,
        conn: FakeConnection | None = None,
        *,
        error: Exception | None = None,
    ) -> None:
        self.conn = conn or FakeConnection()
        self.error = error
        self.checkouts = 0
        self.released: list[Any] = []
        self.database_resets = 0

    def get_connection(self) -> FakeConnection:
        if self.error is not None:
            raise self.error
        self.checkouts += 1
        return self.conn

    def release(self, conn: Any, *, reset_database: bool = False) -> None:
        self.released.append(conn)
        self.database_resets += reset_database
