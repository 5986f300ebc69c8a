from ..introspector import describe_table
from ..models import GetTableDetailArguments, TableDetail
from .base import DatabaseToolBase

class GetTableDetailTool(DatabaseToolBase):
    arguments_model = GetTableDetailArguments

    @property
    def name(self) -> str:
        return "get_table_detail"

    @property
    def description(self) -> str:
        return (
            "Get detailed information about a specific table: its comment and its "
            "columns in definition order (name, type, comment, nullability, default). "
            "An unknown table yields empty fields and no columns."
        )

    def execute(self, arguments: GetTableDetailArguments) -> TableDetail:
        return describe_table(self.session, arguments.table_name)
