from fastapi import APIRouter
from fastapi.responses import JSONResponse

from rds_data_api.core.health import readiness_check

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/liveness/", response_model=None)
async def liveness() -> bool:
    """
    Liveness probe: is the process alive and responsive?

    Lightweight: no DB I/O. Answering at all means the event loop is serving
    requests.
    """
    return True


@router.get("/health-check/", response_model=None)
def health_check() -> bool | JSONResponse:
    """
    Readiness probe: can the service handle traffic?

    Checks that a pooled MySQL connection answers SELECT 1.
    Returns 200 with true if so; 503 otherwise.
    """
    ok, failures = readiness_check()
    if not ok:
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "message": "Service Unavailable",
                "data": failures,
            },
        )
    return True
