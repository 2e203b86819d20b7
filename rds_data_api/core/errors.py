"""
Error taxonomy for statement execution.

Every error carries the HTTP status class it maps to and the Data API
exception name that AWS SDK clients expect in the ``x-amzn-ErrorType`` header.
"""


class DataApiError(Exception):
    """Base class: a terminal failure of one request."""

    status_code: int = 500
    error_type: str = "InternalServerErrorException"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ---------------------------------------------------------------------------
# 400: caller errors
# ---------------------------------------------------------------------------


class BadRequestError(DataApiError):
    status_code = 400
    error_type = "BadRequestException"


class MissingSqlError(BadRequestError):
    def __init__(self) -> None:
        super().__init__("Missing required parameter: sql")


class StatementTooLongError(BadRequestError):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(
            f"SQL statement exceeds maximum length ({length} > {limit} bytes)"
        )
        self.length = length
        self.limit = limit


class DuplicateParameterError(BadRequestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate parameter: {name}")
        self.name = name


class MissingParameterError(BadRequestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Missing parameter: {name}")
        self.name = name


class UnsupportedParameterTypeError(BadRequestError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Array parameters are not supported (parameter '{name}')")
        self.name = name


class InvalidBlobEncodingError(BadRequestError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(
            f"Failed to decode base64 blob for parameter '{name}': {reason}"
        )
        self.name = name


# ---------------------------------------------------------------------------
# 501
# ---------------------------------------------------------------------------


class NotImplementedFeatureError(DataApiError):
    status_code = 501
    error_type = "NotImplementedException"


class SchemaSelectionUnsupportedError(NotImplementedFeatureError):
    def __init__(self, schema: str) -> None:
        super().__init__(
            f"Schema selection is not supported (received schema '{schema}')"
        )
        self.schema = schema


# ---------------------------------------------------------------------------
# 500: environment / engine errors
# ---------------------------------------------------------------------------


class InternalError(DataApiError):
    status_code = 500
    error_type = "InternalServerErrorException"


class SessionUnavailableError(InternalError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to acquire a database connection: {reason}")


class DatabaseSelectionFailedError(InternalError):
    def __init__(self, database: str, reason: str) -> None:
        super().__init__(f"Failed to select database '{database}': {reason}")
        self.database = database


class StatementExecutionFailedError(InternalError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to execute statement: {reason}")


class RowConversionError(InternalError):
    def __init__(self, column: str, type_name: str, reason: str) -> None:
        super().__init__(
            f"Failed to convert column '{column}' ({type_name}): {reason}"
        )
        self.column = column
        self.type_name = type_name


class CommitFailedError(InternalError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to commit transaction: {reason}")


def describe_driver_error(exc: BaseException) -> str:
    """Human-readable text of a driver error.

    PyMySQL errors carry ``(code, message)`` args; only the message is kept.
    """
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return str(args[1])
    if args:
        return str(args[0])
    return type(exc).__name__
