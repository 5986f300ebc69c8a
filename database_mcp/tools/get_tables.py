from typing import List

from ..introspector import list_tables
from ..models import GetTablesArguments, TableInfo
from .base import DatabaseToolBase

class GetTablesTool(DatabaseToolBase):
    arguments_model = GetTablesArguments

    @property
    def name(self) -> str:
        return "get_tables"

    @property
    def description(self) -> str:
        return "Get all tables in the database with their comments"

    def execute(self, arguments: GetTablesArguments) -> List[TableInfo]:
        return list_tables(self.session)
