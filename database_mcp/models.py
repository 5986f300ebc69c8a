from typing import List, Any, Optional, Dict, Literal, Union
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

class TableInfo(BaseModel):
    table_name: str = ""
    table_comment: str = ""

class ColumnInfo(BaseModel):
    column_name: str
    column_type: str
    column_comment: str = ""
    is_nullable: Literal["YES", "NO"]
    column_default: Optional[str] = None

class TableDetail(TableInfo):
    columns: List[ColumnInfo] = Field(default_factory=list)

class WriteOutcome(BaseModel):
    rows_affected: int

Row = Dict[str, Any]

class QueryResult(BaseModel):
    """Rows for statements that return a result set, otherwise the write outcome."""
    rows: Optional[List[Row]] = None
    outcome: Optional[WriteOutcome] = None

    def to_jsonable(self) -> Union[List[Row], Dict[str, Any]]:
        if self.rows is not None:
            return self.rows
        if self.outcome is not None:
            return self.outcome.model_dump()
        return []

# Tool arguments

class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="ignore")

class GetTablesArguments(ToolArguments):
    pass

class GetTableDetailArguments(ToolArguments):
    table_name: StrictStr = Field(description="The name of the table to get details for")

class ExecuteSqlArguments(ToolArguments):
    query: StrictStr = Field(min_length=1, description="The SQL query to execute")

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value

class ToolResponse(BaseModel):
    text: str
    is_error: bool = False
