import logging
from typing import Any, Dict, Mapping, Optional

from ..errors import BadArgument
from ..models import ToolResponse
from ..session import DatabaseSession
from .base import DatabaseToolBase
from .execute_sql import ExecuteSqlTool
from .get_table_detail import GetTableDetailTool
from .get_tables import GetTablesTool

logger = logging.getLogger(__name__)


class ToolAdapter:
    """Dispatches named tool calls to their tool objects.

    Holds no per-call state; the session is only borrowed by each call.
    ``execute_sql`` is registered only when ``allow_execute_sql`` is set.
    """

    def __init__(self, session: DatabaseSession, allow_execute_sql: bool = True):
        tools = [GetTablesTool(session), GetTableDetailTool(session)]
        if allow_execute_sql:
            tools.append(ExecuteSqlTool(session))
        self.tools: Dict[str, DatabaseToolBase] = {tool.name: tool for tool in tools}

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        tool = self.tools.get(name)
        if tool is None:
            error = BadArgument(f"unknown tool: {name}")
            logger.warning(str(error))
            return ToolResponse(text=str(error), is_error=True)
        logger.info(f"Tool call: {name}")
        return tool.run(arguments)


__all__ = [
    "DatabaseToolBase",
    "ExecuteSqlTool",
    "GetTableDetailTool",
    "GetTablesTool",
    "ToolAdapter",
]
