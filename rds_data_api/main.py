import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from rds_data_api.api.main import api_router
from rds_data_api.core.config import settings
from rds_data_api.core.errors import BadRequestError, DataApiError
from rds_data_api.core.pool import get_pool_manager

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_logger = logging.getLogger(__name__)

_ERROR_TYPE_HEADER = "x-amzn-ErrorType"


def custom_generate_unique_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}"


if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(dsn=str(settings.SENTRY_DSN), enable_tracing=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    get_pool_manager().dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Global exception handlers: Data API error format
# ---------------------------------------------------------------------------


def _error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message},
        headers={_ERROR_TYPE_HEADER: error_type},
    )


@app.exception_handler(DataApiError)
async def data_api_exception_handler(
    request: Request, exc: DataApiError
) -> JSONResponse:
    """Map the error taxonomy to its status code and Data API error type."""
    if exc.status_code >= 500:
        _logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        _logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error_response(exc.status_code, exc.error_type, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with a human-readable message instead of raw Pydantic errors."""
    errors = exc.errors()
    messages = []
    for err in errors:
        loc = " → ".join(str(l) for l in err.get("loc", []) if l != "body")
        msg = err.get("msg", "Invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return _error_response(
        BadRequestError.status_code, BadRequestError.error_type, "; ".join(messages)
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Catch-all for unhandled exceptions: log and return 500 with safe message."""
    _logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    detail = "Internal server error"
    if settings.ENVIRONMENT == "local":
        detail = f"Internal server error: {exc}"
    return _error_response(500, "InternalServerErrorException", detail)


app.include_router(api_router)
