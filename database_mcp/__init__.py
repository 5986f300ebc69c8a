"""MCP server exposing schema introspection and SQL execution for several database engines."""
from .config import DatabaseConfig
from .dialects import EngineKind, get_dialect
from .errors import (
    BadArgument,
    DatabaseConnectionError,
    DatabaseMCPError,
    ErrorCodes,
    QueryError,
    SerializationError,
    StatementPurpose,
    UnsupportedDialect,
)
from .executor import execute
from .introspector import describe_table, list_tables
from .session import DatabaseSession
from .tools import ToolAdapter

__version__ = "0.1.0"

__all__ = [
    "BadArgument",
    "DatabaseConfig",
    "DatabaseConnectionError",
    "DatabaseMCPError",
    "DatabaseSession",
    "EngineKind",
    "ErrorCodes",
    "QueryError",
    "SerializationError",
    "StatementPurpose",
    "ToolAdapter",
    "UnsupportedDialect",
    "describe_table",
    "execute",
    "get_dialect",
    "list_tables",
]
