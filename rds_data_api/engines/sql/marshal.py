"""
Convert native MySQL result rows into Data API typed values.

Dispatch is by the MySQL type name of each column (``VARCHAR``, ``BIGINT``,
``DATETIME``, ...). ``describe_columns`` derives those names from a PyMySQL
cursor; ``marshal_row`` converts one row.
"""

import base64
import logging
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, NamedTuple

from pymysql.constants import FIELD_TYPE

from rds_data_api.core.errors import RowConversionError
from rds_data_api.models import (
    BlobField,
    BooleanField,
    DoubleField,
    LongField,
    StringField,
    TypedValue,
    null_field,
)

logger = logging.getLogger(__name__)

_BINARY_CHARSET = 63

TEXT_TYPES = frozenset({"VARCHAR", "CHAR", "TEXT", "LONGTEXT", "MEDIUMTEXT", "TINYTEXT"})
BOOLEAN_TYPES = frozenset({"BOOLEAN", "BOOL"})
INTEGER_TYPES = frozenset({"TINYINT", "SMALLINT", "MEDIUMINT", "INT", "BIGINT"})
DECIMAL_TYPES = frozenset({"FLOAT", "DOUBLE", "DECIMAL", "NUMERIC"})
TEMPORAL_TYPES = frozenset({"DATE", "DATETIME", "TIMESTAMP", "TIME", "YEAR"})
BINARY_TYPES = frozenset(
    {"VARBINARY", "BINARY", "BLOB", "LONGBLOB", "MEDIUMBLOB", "TINYBLOB"}
)

# type code -> (name, name when the column has the binary charset)
_TYPE_NAMES: dict[int, tuple[str, str]] = {
    FIELD_TYPE.SHORT: ("SMALLINT", "SMALLINT"),
    FIELD_TYPE.INT24: ("MEDIUMINT", "MEDIUMINT"),
    FIELD_TYPE.LONG: ("INT", "INT"),
    FIELD_TYPE.LONGLONG: ("BIGINT", "BIGINT"),
    FIELD_TYPE.FLOAT: ("FLOAT", "FLOAT"),
    FIELD_TYPE.DOUBLE: ("DOUBLE", "DOUBLE"),
    FIELD_TYPE.DECIMAL: ("DECIMAL", "DECIMAL"),
    FIELD_TYPE.NEWDECIMAL: ("DECIMAL", "DECIMAL"),
    FIELD_TYPE.DATE: ("DATE", "DATE"),
    FIELD_TYPE.NEWDATE: ("DATE", "DATE"),
    FIELD_TYPE.TIME: ("TIME", "TIME"),
    FIELD_TYPE.DATETIME: ("DATETIME", "DATETIME"),
    FIELD_TYPE.TIMESTAMP: ("TIMESTAMP", "TIMESTAMP"),
    FIELD_TYPE.YEAR: ("YEAR", "YEAR"),
    FIELD_TYPE.VARCHAR: ("VARCHAR", "VARBINARY"),
    FIELD_TYPE.VAR_STRING: ("VARCHAR", "VARBINARY"),
    FIELD_TYPE.STRING: ("CHAR", "BINARY"),
    FIELD_TYPE.TINY_BLOB: ("TINYTEXT", "TINYBLOB"),
    FIELD_TYPE.BLOB: ("TEXT", "BLOB"),
    FIELD_TYPE.MEDIUM_BLOB: ("MEDIUMTEXT", "MEDIUMBLOB"),
    FIELD_TYPE.LONG_BLOB: ("LONGTEXT", "LONGBLOB"),
    FIELD_TYPE.JSON: ("JSON", "JSON"),
    FIELD_TYPE.ENUM: ("ENUM", "ENUM"),
    FIELD_TYPE.SET: ("SET", "SET"),
    FIELD_TYPE.BIT: ("BIT", "BIT"),
    FIELD_TYPE.GEOMETRY: ("GEOMETRY", "GEOMETRY"),
    FIELD_TYPE.NULL: ("NULL", "NULL"),
}


class Column(NamedTuple):
    name: str
    type_name: str


def mysql_type_name(type_code: int, *, length: int | None = None, binary: bool = False) -> str:
    """MySQL type name for a PyMySQL FIELD_TYPE code. TINYINT(1) reports as BOOLEAN."""
    if type_code == FIELD_TYPE.TINY:
        return "BOOLEAN" if length == 1 else "TINYINT"
    names = _TYPE_NAMES.get(type_code)
    if names is None:
        return f"UNKNOWN({type_code})"
    return names[1] if binary else names[0]


def _result_fields(cursor: Any) -> Any:
    # Private PyMySQL API: Cursor._result is a MySQLResult whose .fields holds
    # FieldDescriptorPacket objects. Revisit on PyMySQL upgrades.
    return getattr(getattr(cursor, "_result", None), "fields", None)


def describe_columns(cursor: Any) -> list[Column]:
    """
    Column names and MySQL type names of the cursor's current result set.

    PyMySQL keeps the full field packets (with charset) on the cursor's result;
    ``cursor.description`` alone cannot tell VARBINARY from VARCHAR, so it is
    only the fallback.
    """
    fields = _result_fields(cursor)
    if fields:
        return [
            Column(
                f.name,
                mysql_type_name(
                    f.type_code,
                    length=f.length,
                    binary=f.charsetnr == _BINARY_CHARSET,
                ),
            )
            for f in fields
        ]
    desc = cursor.description
    if not desc:
        return []
    return [Column(d[0], mysql_type_name(d[1], length=d[3])) for d in desc]


# ---------------------------------------------------------------------------
# Per-category conversions
# ---------------------------------------------------------------------------


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    raise TypeError(f"expected text, got {type(value).__name__}")


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    raise TypeError(f"expected boolean, got {type(value).__name__}")


def _as_long(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"expected integer, got {type(value).__name__}")


def _as_double(value: Any) -> float:
    if isinstance(value, (float, int, Decimal)) and not isinstance(value, bool):
        return float(value)
    raise TypeError(f"expected number, got {type(value).__name__}")


def _format_time(value: timedelta) -> str:
    """MySQL TIME text: ``[-]HH:MM:SS[.ffffff]``; hours may exceed 24."""
    sign = "-" if value < timedelta(0) else ""
    value = abs(value)
    hours, rest = divmod(value.days * 86400 + value.seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


def _as_temporal_text(value: Any) -> str:
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, timedelta):
        return _format_time(value)
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, int):  # YEAR
        return f"{value:04d}"
    if isinstance(value, str):  # zero dates come back undecoded
        return value
    raise TypeError(f"expected temporal value, got {type(value).__name__}")


def _as_blob(value: Any) -> str:
    if isinstance(value, str):
        value = value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"expected bytes, got {type(value).__name__}")


def _convert_unknown(column: Column, value: Any) -> TypedValue:
    logger.info("Unknown field type for column '%s': %s", column.name, column.type_name)
    try:
        return StringField(string_value=_as_text(value))
    except (TypeError, UnicodeDecodeError):
        return null_field()


def marshal_value(column: Column, value: Any) -> TypedValue:
    """Convert one native value; NULL wins over the column's declared type."""
    if value is None:
        return null_field()
    type_name = column.type_name
    if type_name in TEXT_TYPES:
        return StringField(string_value=_as_text(value))
    if type_name in BOOLEAN_TYPES:
        return BooleanField(boolean_value=_as_bool(value))
    if type_name in INTEGER_TYPES:
        return LongField(long_value=_as_long(value))
    if type_name in DECIMAL_TYPES:
        return DoubleField(double_value=_as_double(value))
    if type_name in TEMPORAL_TYPES:
        return StringField(string_value=_as_temporal_text(value))
    if type_name in BINARY_TYPES:
        return BlobField(blob_value=_as_blob(value))
    return _convert_unknown(column, value)


def marshal_row(row: Sequence[Any], columns: Sequence[Column]) -> list[TypedValue]:
    """Convert one result row, in column order. Raises RowConversionError."""
    values: list[TypedValue] = []
    for column, value in zip(columns, row, strict=True):
        try:
            values.append(marshal_value(column, value))
        except (TypeError, ValueError) as e:
            logger.error(
                "Error converting column '%s' (%s): %s", column.name, column.type_name, e
            )
            raise RowConversionError(column.name, column.type_name, str(e)) from e
    return values
