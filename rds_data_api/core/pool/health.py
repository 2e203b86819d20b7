"""
Connection health check for the MySQL pool.
"""

import logging
from typing import Any

from .connect import execute

logger = logging.getLogger(__name__)


def health_check(conn: Any) -> bool:
    """
    Run SELECT 1 and return True if no exception.
    """
    cur = None
    try:
        cur = execute(conn, "SELECT 1")
        cur.fetchone()
        return True
    except Exception:
        logger.debug("Health check failed", exc_info=True)
        return False
    finally:
        if cur is not None:
            cur.close()
