"""
Health-check helpers for the readiness probe.

Readiness: can the service handle traffic?  (a pooled MySQL connection answers SELECT 1)
"""

import logging

from rds_data_api.core.pool import get_pool_manager, health_check

logger = logging.getLogger(__name__)


def check_database() -> bool:
    """Check out a pooled connection and run SELECT 1. Returns True if ok."""
    pm = get_pool_manager()
    try:
        conn = pm.get_connection()
    except Exception:
        logger.warning("Database unreachable, treating as unhealthy", exc_info=True)
        return False
    try:
        return health_check(conn)
    finally:
        pm.release(conn)


def readiness_check() -> tuple[bool, list[str]]:
    """
    Run the database check.
    Returns (ok, list of failure messages).
    """
    failures: list[str] = []

    if not check_database():
        failures.append("database")

    return (len(failures) == 0, failures)
