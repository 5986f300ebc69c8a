"""Table and column metadata through the engine's own catalog."""
import logging
from typing import Any, List, Mapping

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from .dialects import Dialect, get_dialect
from .errors import QueryError, StatementPurpose
from .models import ColumnInfo, TableDetail, TableInfo
from .session import DatabaseSession

logger = logging.getLogger(__name__)

_TRUTHY = {"YES", "Y", "TRUE", "T", "1"}


def native_message(error: SQLAlchemyError) -> str:
    """The driver's own error text when there is one."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def _nullable_flag(value: Any) -> str:
    if isinstance(value, str):
        return "YES" if value.strip().upper() in _TRUTHY else "NO"
    return "YES" if value else "NO"


def _fetch(session: DatabaseSession, purpose: StatementPurpose, sql: str, **params) -> List[Mapping[str, Any]]:
    try:
        with session.connection() as conn:
            return list(conn.execute(text(sql), params).mappings())
    except SQLAlchemyError as e:
        logger.error(f"{purpose.value} query failed: {e}")
        raise QueryError(purpose, native_message(e)) from e


def _table_info(row: Mapping[str, Any]) -> TableInfo:
    return TableInfo(
        table_name=_text(row["table_name"]),
        table_comment=_text(row["table_comment"]),
    )


def _column_info(row: Mapping[str, Any]) -> ColumnInfo:
    default = row["column_default"]
    return ColumnInfo(
        column_name=_text(row["column_name"]),
        column_type=_text(row["column_type"]),
        column_comment=_text(row["column_comment"]),
        is_nullable=_nullable_flag(row["is_nullable"]),
        column_default=None if default is None else _text(default),
    )


def list_tables(session: DatabaseSession) -> List[TableInfo]:
    dialect = get_dialect(session.engine_kind)
    rows = _fetch(session, StatementPurpose.LIST_TABLES, dialect.list_tables_sql())
    return [_table_info(row) for row in rows]


def describe_table(session: DatabaseSession, table_name: str) -> TableDetail:
    """Table info then its columns, as two round-trips.

    A table that does not exist yields an empty ``TableDetail`` rather than an
    error.
    """
    dialect: Dialect = get_dialect(session.engine_kind)
    info_rows = _fetch(session, StatementPurpose.TABLE_INFO, dialect.table_info_sql(), table_name=table_name)
    column_rows = _fetch(session, StatementPurpose.COLUMNS_OF, dialect.columns_of_sql(), table_name=table_name)

    info = _table_info(info_rows[0]) if info_rows else TableInfo()
    if not info_rows:
        logger.info(f"Table '{table_name}' not found")
    return TableDetail(
        **info.model_dump(),
        columns=[_column_info(row) for row in column_rows],
    )
