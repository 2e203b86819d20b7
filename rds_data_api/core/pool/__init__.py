"""
MySQL connection and connection pool.

The pool is the session provider of the statement executor: one connection is
checked out per request and released afterwards.
"""

from .connect import DRIVER_PARAMSTYLE, connect, execute, quote_identifier
from .health import health_check
from .manager import PoolManager, get_pool_manager

__all__ = [
    "DRIVER_PARAMSTYLE",
    "connect",
    "execute",
    "quote_identifier",
    "health_check",
    "PoolManager",
    "get_pool_manager",
]
