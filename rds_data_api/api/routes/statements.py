"""
Data API statement endpoints: POST /Execute and POST /BatchExecute.

Flow: validate body -> execute_statement (in a worker thread) -> wire response.
execute_statement is sync/blocking; running it in a thread pool keeps the event
loop free to accept concurrent requests.
"""

import asyncio
import logging

from fastapi import APIRouter

from rds_data_api.core.errors import MissingSqlError
from rds_data_api.engines.sql import execute_statement
from rds_data_api.models import (
    BatchExecuteStatementRequest,
    BatchExecuteStatementResponse,
    ExecuteStatementRequest,
    ExecuteStatementResponse,
    Rows,
    UpdateResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["statements"])


@router.post(
    "/Execute",
    response_model=ExecuteStatementResponse,
    response_model_exclude_none=True,
)
async def execute(body: ExecuteStatementRequest) -> ExecuteStatementResponse:
    """
    ExecuteStatement: run one statement with one (possibly empty) parameter set.

    SELECT statements return ``records``; anything else returns
    ``numberOfRecordsUpdated``.
    """
    logger.info(
        "Received ExecuteStatement request: database=%s, parameters=%d",
        body.database,
        len(body.parameters or []),
    )
    if not body.sql:
        raise MissingSqlError()
    logger.debug("SQL: %s", body.sql)

    outcome = await asyncio.to_thread(
        execute_statement,
        body.sql,
        [body.parameters or []],
        database=body.database,
        schema=body.schema_,
    )
    if isinstance(outcome, Rows):
        return ExecuteStatementResponse(records=outcome.records)
    return ExecuteStatementResponse(number_of_records_updated=outcome.count)


@router.post(
    "/BatchExecute",
    response_model=BatchExecuteStatementResponse,
    response_model_exclude_none=True,
)
async def batch_execute(
    body: BatchExecuteStatementRequest,
) -> BatchExecuteStatementResponse:
    """
    BatchExecuteStatement: run one statement once per parameter set, atomically.

    The statement runs once per given parameter set; no parameterSets (or an
    empty list) runs nothing. Generated fields are not reported.
    """
    parameter_sets = body.parameter_sets or []
    logger.info(
        "Received BatchExecuteStatement request: database=%s, parameter_sets=%d",
        body.database,
        len(parameter_sets),
    )
    if not body.sql:
        raise MissingSqlError()
    logger.debug("SQL: %s", body.sql)

    await asyncio.to_thread(
        execute_statement,
        body.sql,
        parameter_sets,
        database=body.database,
        schema=body.schema_,
    )
    return BatchExecuteStatementResponse(
        update_results=[UpdateResult() for _ in parameter_sets]
    )
