from .base import Dialect, EngineKind


class MySQLDialect(Dialect):
    kind = EngineKind.MYSQL

    _TABLES = """
        SELECT table_name AS table_name,
               COALESCE(table_comment, '') AS table_comment
        FROM information_schema.tables
        WHERE table_schema = DATABASE()
    """

    def list_tables_sql(self) -> str:
        return self._TABLES

    def table_info_sql(self) -> str:
        return self._TABLES + "  AND table_name = :table_name\n"

    def columns_of_sql(self) -> str:
        return """
        SELECT column_name AS column_name,
               column_type AS column_type,
               COALESCE(column_comment, '') AS column_comment,
               is_nullable AS is_nullable,
               column_default AS column_default
        FROM information_schema.columns
        WHERE table_schema = DATABASE()
          AND table_name = :table_name
        ORDER BY ordinal_position
    """
