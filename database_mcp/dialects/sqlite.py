from .base import Dialect, EngineKind


class SQLiteDialect(Dialect):
    """SQLite has no comment support, so both comment columns are empty."""

    kind = EngineKind.SQLITE

    _TABLES = """
        SELECT name AS table_name,
               '' AS table_comment
        FROM sqlite_master
        WHERE type = 'table'
          AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
    """

    def list_tables_sql(self) -> str:
        return self._TABLES

    def table_info_sql(self) -> str:
        return self._TABLES + "  AND name = :table_name\n"

    def columns_of_sql(self) -> str:
        return """
        SELECT name AS column_name,
               type AS column_type,
               '' AS column_comment,
               CASE WHEN "notnull" = 0 THEN 'YES' ELSE 'NO' END AS is_nullable,
               dflt_value AS column_default
        FROM pragma_table_info(:table_name)
        WHERE EXISTS (
            SELECT 1 FROM sqlite_master
            WHERE type = 'table'
              AND name = :table_name
              AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
        )
        ORDER BY cid
    """
