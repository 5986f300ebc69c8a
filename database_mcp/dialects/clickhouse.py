from .base import Dialect, EngineKind

# Nullable(T), possibly wrapped as LowCardinality(Nullable(T))
NULLABLE_TYPE_PATTERN = r"^(LowCardinality\()?Nullable\("


def _string_literal(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


class ClickHouseDialect(Dialect):
    kind = EngineKind.CLICKHOUSE

    _TABLES = """
        SELECT name AS table_name,
               comment AS table_comment
        FROM system.tables
        WHERE database = currentDatabase()
    """

    def list_tables_sql(self) -> str:
        return self._TABLES

    def table_info_sql(self) -> str:
        return self._TABLES + "  AND name = :table_name\n"

    def columns_of_sql(self) -> str:
        # system.columns has no nullability flag; it is encoded in the type itself
        return f"""
        SELECT name AS column_name,
               type AS column_type,
               comment AS column_comment,
               if(match(type, {_string_literal(NULLABLE_TYPE_PATTERN)}), 'YES', 'NO') AS is_nullable,
               nullIf(default_expression, '') AS column_default
        FROM system.columns
        WHERE database = currentDatabase()
          AND table = :table_name
        ORDER BY position
    """
