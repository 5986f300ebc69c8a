import logging
from functools import partial
from typing import Any, Dict, Optional

import anyio
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .config import DatabaseConfig
from .session import DatabaseSession
from .tools import ToolAdapter

logger = logging.getLogger(__name__)


class ToolRunner:
    """Runs adapter calls off the event loop, under an optional deadline."""

    def __init__(self, adapter: ToolAdapter, timeout: Optional[float] = None):
        self.adapter = adapter
        self.timeout = timeout

    async def run(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> str:
        try:
            with anyio.fail_after(self.timeout):
                response = await anyio.to_thread.run_sync(
                    partial(self.adapter.call, name, arguments),
                    abandon_on_cancel=True,
                )
        except TimeoutError:
            logger.error(f"{name} timed out after {self.timeout} seconds")
            raise ToolError(f"timeout: {name} did not finish within {self.timeout} seconds")

        if response.is_error:
            raise ToolError(response.text)
        return response.text


def build_server(session: DatabaseSession, config: DatabaseConfig) -> FastMCP:
    adapter = ToolAdapter(session, allow_execute_sql=config.allow_execute_sql)
    runner = ToolRunner(adapter, timeout=config.query_timeout)

    # Initialize MCP server
    mcp = FastMCP("database-mcp", host=config.server_host, port=config.server_port)

    tables_tool = adapter.tools["get_tables"]
    detail_tool = adapter.tools["get_table_detail"]

    @mcp.tool(name=tables_tool.name, description=tables_tool.description)
    async def get_tables() -> str:
        return await runner.run(tables_tool.name, {})

    @mcp.tool(name=detail_tool.name, description=detail_tool.description)
    async def get_table_detail(table_name: str) -> str:
        return await runner.run(detail_tool.name, {"table_name": table_name})

    if config.allow_execute_sql:
        sql_tool = adapter.tools["execute_sql"]

        @mcp.tool(name=sql_tool.name, description=sql_tool.description)
        async def execute_sql(query: str) -> str:
            return await runner.run(sql_tool.name, {"query": query})
    else:
        logger.info("execute_sql is disabled")

    return mcp
