"""
Pydantic models for the RDS Data API wire format.

Typed values and array values are closed unions: each variant is its own model
holding exactly one camelCase key, and ``extra="forbid"`` makes the key decide
which variant validates. ``{"longValue": 5}`` can only become ``LongField``.
"""

from enum import Enum
from typing import Annotated, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


# Data API longValue is a signed 64-bit integer; booleans are not coerced
Int64 = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]


class _RequestModel(BaseModel):
    # resourceArn, secretArn, includeResultMetadata, ... are accepted and ignored
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# ---------------------------------------------------------------------------
# ArrayValue
# ---------------------------------------------------------------------------


class NestedArrays(_WireModel):
    array_values: list["ArrayValue"]


class BooleanArray(_WireModel):
    boolean_values: list[bool]


class DoubleArray(_WireModel):
    double_values: list[float]


class LongArray(_WireModel):
    long_values: list[Int64]


class StringArray(_WireModel):
    string_values: list[str]


ArrayValue = NestedArrays | BooleanArray | DoubleArray | LongArray | StringArray

NestedArrays.model_rebuild()


# ---------------------------------------------------------------------------
# TypedValue (the Data API "Field")
# ---------------------------------------------------------------------------


class ArrayField(_WireModel):
    array_value: ArrayValue


class BlobField(_WireModel):
    """Binary payload; ``blob_value`` is the base64 text as sent on the wire."""

    blob_value: str


class BooleanField(_WireModel):
    boolean_value: bool


class DoubleField(_WireModel):
    double_value: float


class NullField(_WireModel):
    is_null: Literal[True]


class LongField(_WireModel):
    long_value: Int64


class StringField(_WireModel):
    string_value: str


TypedValue = (
    ArrayField
    | BlobField
    | BooleanField
    | DoubleField
    | NullField
    | LongField
    | StringField
)


def null_field() -> NullField:
    return NullField(is_null=True)


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


class TypeHintEnum(str, Enum):
    """Advisory hint on how the caller wants a string parameter interpreted."""

    DATE = "DATE"
    DECIMAL = "DECIMAL"
    JSON = "JSON"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    UUID = "UUID"


class SqlParameter(_WireModel):
    name: str
    value: TypedValue
    type_hint: TypeHintEnum | None = None


# ---------------------------------------------------------------------------
# ExecuteStatement / BatchExecuteStatement
# ---------------------------------------------------------------------------


class ExecuteStatementRequest(_RequestModel):
    """Body for POST /Execute."""

    sql: str | None = None
    database: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    parameters: list[SqlParameter] | None = None


class ExecuteStatementResponse(_WireModel):
    records: list[list[TypedValue]] | None = None
    number_of_records_updated: int = 0
    generated_fields: list[TypedValue] | None = None


class BatchExecuteStatementRequest(_RequestModel):
    """Body for POST /BatchExecute."""

    sql: str | None = None
    database: str | None = None
    schema_: str | None = Field(default=None, alias="schema")
    parameter_sets: list[list[SqlParameter]] | None = None


class UpdateResult(_WireModel):
    generated_fields: list[TypedValue] | None = None


class BatchExecuteStatementResponse(_WireModel):
    update_results: list[UpdateResult] | None = None


# ---------------------------------------------------------------------------
# Execution outcome (one of the two per request)
# ---------------------------------------------------------------------------


class Rows(NamedTuple):
    records: list[list[TypedValue]]


class AffectedRowCount(NamedTuple):
    count: int


ExecutionOutcome = Rows | AffectedRowCount
