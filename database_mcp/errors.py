from enum import Enum
from typing import Optional


class ErrorCodes(Enum):
    UNSUPPORTED_DIALECT = "unsupported_dialect"
    CONNECTION_ERROR = "connection_error"
    QUERY_ERROR = "query_error"
    SERIALIZATION_ERROR = "serialization_error"
    BAD_ARGUMENT = "bad_argument"


class StatementPurpose(Enum):
    LIST_TABLES = "list_tables"
    TABLE_INFO = "table_info"
    COLUMNS_OF = "columns_of"
    EXECUTE = "execute"


class DatabaseMCPError(Exception):
    def __init__(self, code: ErrorCodes, message: str, details: Optional[str] = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"{code.value}: {message}")


class UnsupportedDialect(DatabaseMCPError):
    def __init__(self, engine_kind: str):
        self.engine_kind = engine_kind
        super().__init__(
            ErrorCodes.UNSUPPORTED_DIALECT,
            f"unsupported database type: {engine_kind}"
        )


class DatabaseConnectionError(DatabaseMCPError):
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(ErrorCodes.CONNECTION_ERROR, message, details)


class QueryError(DatabaseMCPError):
    """SQL execution failure, tagged with the statement that was running."""

    code = ErrorCodes.QUERY_ERROR

    def __init__(self, purpose: StatementPurpose, message: str, details: Optional[str] = None):
        self.purpose = purpose
        super().__init__(self.code, f"{purpose.value} failed: {message}", details)


class SerializationError(QueryError):
    code = ErrorCodes.SERIALIZATION_ERROR

    def __init__(self, message: str):
        super().__init__(StatementPurpose.EXECUTE, message)


class BadArgument(DatabaseMCPError):
    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(ErrorCodes.BAD_ARGUMENT, message, details)
