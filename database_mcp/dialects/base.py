from abc import ABC, abstractmethod
from enum import Enum


class EngineKind(str, Enum):
    MYSQL = "mysql"
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    SQLSERVER = "sqlserver"
    CLICKHOUSE = "clickhouse"


class Dialect(ABC):
    """SQL templates for introspecting one database engine.

    Every template that filters on a table takes it through the single
    ``:table_name`` bound parameter. Result columns are always labelled
    ``table_name``/``table_comment`` for tables and ``column_name``,
    ``column_type``, ``column_comment``, ``is_nullable``, ``column_default``
    for columns, so the introspector can read any engine the same way.
    """

    @property
    @abstractmethod
    def kind(self) -> EngineKind:
        pass

    @abstractmethod
    def list_tables_sql(self) -> str:
        """All tables of the session's current database or schema."""

    @abstractmethod
    def table_info_sql(self) -> str:
        """The single table matching ``:table_name``."""

    @abstractmethod
    def columns_of_sql(self) -> str:
        """Columns of ``:table_name`` in ordinal order."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind.value}>"
