"""
Resolve rewritten placeholder names against one parameter set.

The result is the positional argument list for one execution of the statement.
"""

import base64
import binascii
from collections.abc import Sequence
from typing import Any

from rds_data_api.core.errors import (
    DuplicateParameterError,
    InvalidBlobEncodingError,
    MissingParameterError,
    UnsupportedParameterTypeError,
)
from rds_data_api.models import (
    ArrayField,
    BlobField,
    BooleanField,
    DoubleField,
    LongField,
    NullField,
    SqlParameter,
    StringField,
    TypedValue,
)


def _index_parameters(params: Sequence[SqlParameter]) -> dict[str, SqlParameter]:
    by_name: dict[str, SqlParameter] = {}
    for param in params:
        if param.name in by_name:
            raise DuplicateParameterError(param.name)
        by_name[param.name] = param
    return by_name


def to_bind_value(name: str, value: TypedValue) -> Any:
    """Convert one typed value to what the DB-API driver binds."""
    if isinstance(value, ArrayField):
        raise UnsupportedParameterTypeError(name)
    if isinstance(value, BlobField):
        try:
            return base64.b64decode(value.blob_value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidBlobEncodingError(name, str(e)) from e
    if isinstance(value, BooleanField):
        return value.boolean_value
    if isinstance(value, DoubleField):
        return value.double_value
    if isinstance(value, LongField):
        return value.long_value
    if isinstance(value, StringField):
        return value.string_value
    if isinstance(value, NullField):
        return None
    raise TypeError(f"Unknown value type for parameter '{name}': {type(value).__name__}")


def bind_parameters(names: Sequence[str], params: Sequence[SqlParameter]) -> list[Any]:
    """
    Return one bind value per entry of *names*, in order.

    Raises DuplicateParameterError when *params* repeats a name (checked first,
    even for names the statement never references), MissingParameterError when
    the statement references a name *params* lacks.
    """
    by_name = _index_parameters(params)
    values: list[Any] = []
    for name in names:
        param = by_name.get(name)
        if param is None:
            raise MissingParameterError(name)
        values.append(to_bind_value(name, param.value))
    return values
