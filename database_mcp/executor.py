"""Runs caller-supplied SQL verbatim.

SECURITY: nothing here validates, sanitizes or restricts the statement.
Destructive SQL (DROP, DELETE, GRANT, ...) runs with whatever privileges the
connection's database user holds. Expose ``execute`` only where that is
acceptable; the tool layer can switch it off with ``allow_execute_sql``.
"""
import datetime
import json
import logging
import math
import uuid
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from .dialects import get_dialect
from .errors import QueryError, SerializationError, StatementPurpose
from .introspector import native_message
from .models import QueryResult, Row, WriteOutcome
from .session import DatabaseSession

logger = logging.getLogger(__name__)


def to_portable(value: Any) -> Any:
    """Project a driver value onto JSON's string/number/boolean/null."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"non-finite number {value!r} has no JSON representation")
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise SerializationError(f"non-finite decimal {value!r} has no JSON representation")
        if value == value.to_integral_value():
            return int(value)
        as_float = float(value)
        # keep the exact text when a float cannot reproduce the value
        if Decimal(repr(as_float)) == value:
            return as_float
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return value.total_seconds()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw.hex()
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(_portable_members(value), separators=(",", ":"))
    raise SerializationError(f"unsupported value type {type(value).__name__}")


def _portable_members(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _portable_members(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_portable_members(v) for v in value]
    return to_portable(value)


def _row(columns: List[str], values) -> Row:
    row: Dict[str, Any] = {}
    # duplicate labels: the last value wins
    for name, value in zip(columns, values):
        row[name] = to_portable(value)
    return row


def execute(session: DatabaseSession, sql: str) -> QueryResult:
    # unknown engines fail before a connection is checked out
    get_dialect(session.engine_kind)
    logger.info(f"Executing SQL ({len(sql)} chars)")
    try:
        with session.begin() as conn:
            # no_parameters: the text reaches the driver untouched, no bind or % parsing
            result = conn.execution_options(no_parameters=True).exec_driver_sql(sql)
            if not result.returns_rows:
                affected = result.rowcount
                if affected is not None and affected >= 0:
                    return QueryResult(outcome=WriteOutcome(rows_affected=affected))
                return QueryResult()
            columns = [str(key) for key in result.keys()]
            # projected inside the transaction so a value that cannot be
            # represented rolls back writes that return rows
            return QueryResult(rows=[_row(columns, values) for values in result.fetchall()])
    except SQLAlchemyError as e:
        logger.error(f"SQL execution failed: {e}")
        raise QueryError(StatementPurpose.EXECUTE, native_message(e)) from e

