"""
Engines: SQL statement execution against the configured MySQL server.
"""

from rds_data_api.engines.sql import execute_statement, is_read, rewrite_named_parameters

__all__ = [
    "execute_statement",
    "is_read",
    "rewrite_named_parameters",
]
