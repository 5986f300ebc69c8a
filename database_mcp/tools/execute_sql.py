from ..executor import execute
from ..models import ExecuteSqlArguments, QueryResult
from .base import DatabaseToolBase

class ExecuteSqlTool(DatabaseToolBase):
    """Arbitrary SQL with the connection's full privileges, including writes and DDL."""

    arguments_model = ExecuteSqlArguments

    @property
    def name(self) -> str:
        return "execute_sql"

    @property
    def description(self) -> str:
        return (
            "Execute a SQL statement exactly as given. Reads return a JSON array of row "
            "objects; writes return {\"rows_affected\": n} when the engine reports a count. "
            "WARNING: the statement is not restricted in any way and runs with the "
            "privileges of the configured database user."
        )

    def execute(self, arguments: ExecuteSqlArguments) -> QueryResult:
        return execute(self.session, arguments.query)
