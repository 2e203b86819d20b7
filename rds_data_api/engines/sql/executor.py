"""
Execute one statement, once per parameter set, in a single transaction.

Flow: reject oversize SQL / schema selection -> check out one pooled connection
-> ``USE`` the requested database on it -> rewrite ``:name`` parameters once and
classify once -> bind + execute per parameter set -> commit (or roll back on any
failure) -> release the connection, restoring the default database if ``USE``
ran.

Every statement of a request runs on the same connection, so ``USE`` applies
to all of them and the whole batch commits or rolls back together.
"""

import logging
from collections.abc import Sequence
from typing import Any

import pymysql

from rds_data_api.core.config import settings
from rds_data_api.core.errors import (
    CommitFailedError,
    DatabaseSelectionFailedError,
    SchemaSelectionUnsupportedError,
    SessionUnavailableError,
    StatementExecutionFailedError,
    StatementTooLongError,
    describe_driver_error,
)
from rds_data_api.core.pool import (
    DRIVER_PARAMSTYLE,
    PoolManager,
    execute,
    get_pool_manager,
    quote_identifier,
)
from rds_data_api.engines.sql.binder import bind_parameters
from rds_data_api.engines.sql.marshal import describe_columns, marshal_row
from rds_data_api.engines.sql.parser import (
    RewrittenStatement,
    is_read,
    rewrite_named_parameters,
)
from rds_data_api.models import (
    AffectedRowCount,
    ExecutionOutcome,
    Rows,
    SqlParameter,
    TypedValue,
)

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (pymysql.Error, OSError)


def _use_database(conn: Any, database: str) -> None:
    try:
        cur = execute(conn, f"USE {quote_identifier(database)}")
        cur.close()
    except _DRIVER_ERRORS as e:
        logger.error("Failed to select database '%s': %s", database, e, exc_info=True)
        raise DatabaseSelectionFailedError(database, describe_driver_error(e)) from e


def _execute_one(conn: Any, sql: str, values: list[Any]) -> Any:
    try:
        return execute(conn, sql, values)
    except _DRIVER_ERRORS as e:
        logger.error("Failed to execute query: %s", e, exc_info=True)
        raise StatementExecutionFailedError(describe_driver_error(e)) from e


def _fetch_records(cur: Any) -> list[list[TypedValue]]:
    try:
        columns = describe_columns(cur)
        return [marshal_row(row, columns) for row in cur.fetchall()]
    finally:
        cur.close()


def _run_batch(
    conn: Any,
    statement: RewrittenStatement,
    parameter_sets: Sequence[Sequence[SqlParameter]],
    read: bool,
) -> ExecutionOutcome:
    records: list[list[TypedValue]] = []
    affected_rows = 0
    for params in parameter_sets:
        values = bind_parameters(statement.names, params)
        cur = _execute_one(conn, statement.sql, values)
        if read:
            records.extend(_fetch_records(cur))
        else:
            affected_rows += max(cur.rowcount or 0, 0)
            cur.close()
    if read:
        return Rows(records)
    return AffectedRowCount(affected_rows)


def _rollback(conn: Any) -> None:
    try:
        conn.rollback()
    except Exception:
        logger.warning("Rollback failed", exc_info=True)


def execute_statement(
    sql: str,
    parameter_sets: Sequence[Sequence[SqlParameter]],
    *,
    database: str | None = None,
    schema: str | None = None,
    pool: PoolManager | None = None,
) -> ExecutionOutcome:
    """
    Run *sql* once per entry of *parameter_sets* on one connection and commit.

    Returns Rows (all records of all executions, in order) when the statement
    is a SELECT, else AffectedRowCount summed over the batch. Raises a
    DataApiError subclass on failure; nothing is committed in that case.
    """
    sql_bytes = len(sql.encode("utf-8"))
    if sql_bytes > settings.MAX_SQL_LENGTH:
        raise StatementTooLongError(sql_bytes, settings.MAX_SQL_LENGTH)
    if schema:
        raise SchemaSelectionUnsupportedError(schema)

    pm = pool or get_pool_manager()
    try:
        conn = pm.get_connection()
    except _DRIVER_ERRORS as e:
        logger.error("Failed to acquire a database connection: %s", e, exc_info=True)
        raise SessionUnavailableError(describe_driver_error(e)) from e

    try:
        try:
            if database:
                _use_database(conn, database)
            statement = rewrite_named_parameters(sql, paramstyle=DRIVER_PARAMSTYLE)
            read = is_read(sql)
            outcome = _run_batch(conn, statement, parameter_sets, read)
        except Exception:
            _rollback(conn)
            raise

        try:
            conn.commit()
        except _DRIVER_ERRORS as e:
            logger.warning("Failed to commit transaction: %s", e, exc_info=True)
            _rollback(conn)
            raise CommitFailedError(describe_driver_error(e)) from e
    finally:
        pm.release(conn, reset_database=bool(database))

    if isinstance(outcome, Rows):
        logger.debug(
            "Query executed successfully over %d parameter set(s), fetched %d records",
            len(parameter_sets),
            len(outcome.records),
        )
    else:
        logger.debug(
            "Statement executed over %d parameter set(s), %d rows affected",
            len(parameter_sets),
            outcome.count,
        )
    return outcome
