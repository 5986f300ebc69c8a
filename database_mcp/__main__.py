import argparse
import logging
import sys
from typing import List, Optional

from .config import DatabaseConfig, parse_addr
from .errors import DatabaseMCPError
from .server import build_server
from .session import DatabaseSession

logger = logging.getLogger("database_mcp")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="database-mcp",
        description="MCP server for inspecting and querying a SQL database.",
        epilog=(
            "Flags override DB_*/MCP_* environment variables (a .env file is read too), "
            "which override the database section of the config file. "
            "Example: database-mcp --db-type postgres --db-host localhost --db-port 5432 "
            "--db-user postgres --db-pass password --db-name mydb --db-ssl-mode disable"
        ),
    )
    parser.add_argument("--config", help="Path to a YAML config file (default config.yaml when present; env DB_CONFIG)")
    parser.add_argument("--db-type", help="Database type (mysql, postgres, sqlite, sqlserver, clickhouse)")
    parser.add_argument("--db-host", help="Database host")
    parser.add_argument("--db-port", type=int, help="Database port")
    parser.add_argument("--db-user", help="Database username")
    parser.add_argument("--db-pass", help="Database password")
    parser.add_argument("--db-name", help="Database name")
    parser.add_argument("--db-ssl-mode", help="Database SSL mode (for postgres)")
    parser.add_argument("--db-file", help="Database file (for sqlite)")
    parser.add_argument("--mode", help="Server mode (stdio, sse or streamable-http; http is an alias for sse)")
    parser.add_argument("--addr", help="HTTP listen address, host:port or :port")
    parser.add_argument("--query-timeout", type=float, help="Seconds before a tool call is reported as timed out")
    parser.add_argument(
        "--disable-execute-sql",
        action="store_true",
        help="Do not expose the execute_sql tool",
    )
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> DatabaseConfig:
    server_host = server_port = None
    if args.addr:
        server_host, server_port = parse_addr(args.addr)

    return DatabaseConfig.from_env(args.config).override(
        db_type=args.db_type,
        host=args.db_host,
        port=args.db_port,
        username=args.db_user,
        password=args.db_pass,
        database=args.db_name,
        ssl_mode=args.db_ssl_mode,
        file=args.db_file,
        mode=args.mode,
        server_host=server_host,
        server_port=server_port,
        query_timeout=args.query_timeout,
        allow_execute_sql=False if args.disable_execute_sql else None,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    # Configure logging; stderr keeps the stdio transport clean
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        session = DatabaseSession.connect(config)
    except DatabaseMCPError as e:
        logger.error(f"Failed to start database-mcp: {e}")
        if e.details:
            logger.error(e.details)
        return 1

    try:
        server = build_server(session, config)
        logger.info(f"Starting database-mcp ({config.mode})")
        server.run(transport=config.mode)
    finally:
        session.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
