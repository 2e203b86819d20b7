"""
SQL statement engine: named-parameter rewriting, binding, row marshaling, execution.

Exports: rewrite_named_parameters, is_read, bind_parameters, marshal_row, execute_statement.
"""

from rds_data_api.engines.sql.binder import bind_parameters
from rds_data_api.engines.sql.executor import execute_statement
from rds_data_api.engines.sql.marshal import Column, describe_columns, marshal_row
from rds_data_api.engines.sql.parser import (
    RewrittenStatement,
    is_read,
    rewrite_named_parameters,
)

__all__ = [
    "Column",
    "RewrittenStatement",
    "bind_parameters",
    "describe_columns",
    "execute_statement",
    "is_read",
    "marshal_row",
    "rewrite_named_parameters",
]
