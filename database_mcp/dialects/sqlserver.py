from .base import Dialect, EngineKind


class SQLServerDialect(Dialect):
    kind = EngineKind.SQLSERVER

    # The MS_Description filter lives in the join so uncommented tables are still listed.
    _TABLES = """
        SELECT t.name AS table_name,
               COALESCE(CAST(ep.value AS NVARCHAR(MAX)), '') AS table_comment
        FROM sys.tables t
        LEFT JOIN sys.extended_properties ep
               ON ep.major_id = t.object_id
              AND ep.minor_id = 0
              AND ep.class = 1
              AND ep.name = 'MS_Description'
    """

    def list_tables_sql(self) -> str:
        return self._TABLES

    def table_info_sql(self) -> str:
        return self._TABLES + "  WHERE t.name = :table_name\n"

    def columns_of_sql(self) -> str:
        return """
        SELECT c.name AS column_name,
               t.name AS column_type,
               COALESCE(CAST(ep.value AS NVARCHAR(MAX)), '') AS column_comment,
               CASE WHEN c.is_nullable = 1 THEN 'YES' ELSE 'NO' END AS is_nullable,
               OBJECT_DEFINITION(c.default_object_id) AS column_default
        FROM sys.columns c
        JOIN sys.types t ON c.user_type_id = t.user_type_id
        LEFT JOIN sys.extended_properties ep
               ON ep.major_id = c.object_id
              AND ep.minor_id = c.column_id
              AND ep.class = 1
              AND ep.name = 'MS_Description'
        WHERE c.object_id = OBJECT_ID(:table_name)
        ORDER BY c.column_id
    """
