from .base import Dialect, EngineKind


class PostgresDialect(Dialect):
    """Tables of the ``public`` schema, comments via the pg_catalog description lookups."""

    kind = EngineKind.POSTGRES

    _TABLES = """
        SELECT t.table_name AS table_name,
               COALESCE(obj_description(c.oid, 'pg_class'), '') AS table_comment
        FROM information_schema.tables t
        JOIN pg_catalog.pg_namespace n ON n.nspname = t.table_schema
        JOIN pg_catalog.pg_class c ON c.relname = t.table_name AND c.relnamespace = n.oid
        WHERE t.table_schema = 'public'
    """

    def list_tables_sql(self) -> str:
        return self._TABLES

    def table_info_sql(self) -> str:
        return self._TABLES + "  AND t.table_name = :table_name\n"

    def columns_of_sql(self) -> str:
        # col_description wants attnum, which drifts from ordinal_position after dropped columns
        return """
        SELECT col.column_name AS column_name,
               col.data_type AS column_type,
               COALESCE(col_description(c.oid, a.attnum), '') AS column_comment,
               col.is_nullable AS is_nullable,
               col.column_default AS column_default
        FROM information_schema.columns col
        JOIN pg_catalog.pg_namespace n ON n.nspname = col.table_schema
        JOIN pg_catalog.pg_class c ON c.relname = col.table_name AND c.relnamespace = n.oid
        JOIN pg_catalog.pg_attribute a ON a.attrelid = c.oid AND a.attname = col.column_name
        WHERE col.table_schema = 'public'
          AND col.table_name = :table_name
        ORDER BY col.ordinal_position
    """
