import os
from typing import Optional
from dataclasses import dataclass, replace

import yaml
from dotenv import load_dotenv
from sqlalchemy.engine import URL

from .dialects import EngineKind, resolve_engine_kind

DEFAULT_PORTS = {
    EngineKind.MYSQL: 3306,
    EngineKind.POSTGRES: 5432,
    EngineKind.SQLSERVER: 1433,
    EngineKind.CLICKHOUSE: 9000,
}

TRANSPORTS = ("stdio", "sse", "streamable-http")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_CONFIG_FILE = "config.yaml"

# keys of the ``database:`` mapping in a config file -> DatabaseConfig fields
FILE_KEYS = {
    "type": "db_type",
    "host": "host",
    "port": "port",
    "username": "username",
    "password": "password",
    "database": "database",
    "ssl_mode": "ssl_mode",
    "file": "file",
    "mode": "mode",
    "query_timeout": "query_timeout",
    "allow_execute_sql": "allow_execute_sql",
    "log_level": "log_level",
}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value else default


def _env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else default


def normalize_mode(mode: str) -> str:
    mode = mode.strip().lower()
    # "http" is the older name for the SSE transport
    if mode == "http":
        return "sse"
    if mode not in TRANSPORTS:
        raise ValueError(f"unknown server mode: {mode} (expected one of {', '.join(TRANSPORTS)})")
    return mode


def normalize_log_level(level: str) -> str:
    level = level.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level: {level} (expected one of {', '.join(LOG_LEVELS)})")
    return level


def parse_addr(addr: str) -> tuple:
    """Split ``host:port`` or ``:port`` into its parts; an empty host means 0.0.0.0."""
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address: {addr!r}")
    return host or "0.0.0.0", int(port)


def load_config_file(path: Optional[str] = None) -> dict:
    """
    Read the ``database:`` mapping of a YAML config file as DatabaseConfig field values.

    An explicitly named file must exist; the default ``config.yaml`` is skipped
    when it is absent. Unknown keys are ignored.
    """
    explicit = path is not None
    path = path or DEFAULT_CONFIG_FILE
    if not os.path.exists(path):
        if explicit:
            raise ValueError(f"config file not found: {path}")
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"error reading config file {path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"config file {path} must be a YAML mapping")
    section = raw.get("database") or {}
    if not isinstance(section, dict):
        raise ValueError(f"'database' in {path} must be a mapping")

    values = {field: section[key] for key, field in FILE_KEYS.items() if section.get(key) is not None}
    # YAML reads unquoted digits as numbers; a password of 1234 is still text
    for field in ("db_type", "host", "username", "password", "database", "ssl_mode", "file", "mode", "log_level"):
        if field in values:
            values[field] = str(values[field])
    if "port" in values:
        values["port"] = int(values["port"])
    if "query_timeout" in values:
        values["query_timeout"] = float(values["query_timeout"])
    if isinstance(values.get("allow_execute_sql"), str):
        values["allow_execute_sql"] = values["allow_execute_sql"].strip().lower() in ("1", "true", "yes", "on")
    if section.get("addr"):
        values["server_host"], values["server_port"] = parse_addr(str(section["addr"]))
    return values


@dataclass(frozen=True)
class DatabaseConfig:
    db_type: str = EngineKind.MYSQL.value
    host: str = "localhost"
    port: Optional[int] = None
    username: str = "root"
    password: str = ""
    database: str = "mydb"
    ssl_mode: str = "disable"
    file: str = "database.db"
    mode: str = "stdio"
    server_host: str = "127.0.0.1"
    server_port: int = 8080
    query_timeout: Optional[float] = None
    allow_execute_sql: bool = True
    log_level: str = "INFO"

    def __post_init__(self):
        object.__setattr__(self, "mode", normalize_mode(self.mode))
        object.__setattr__(self, "log_level", normalize_log_level(self.log_level))

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> 'DatabaseConfig':
        """
        Assemble the configuration from a YAML config file overlaid by the environment.

        ``config_file`` falls back to ``DB_CONFIG`` and then to ``config.yaml``.
        """
        load_dotenv()
        base = replace(cls(), **load_config_file(config_file or os.getenv("DB_CONFIG") or None))
        return cls(
            db_type=os.getenv("DB_TYPE", base.db_type),
            host=os.getenv("DB_HOST", base.host),
            port=_env_int("DB_PORT", base.port),
            username=os.getenv("DB_USER", base.username),
            password=os.getenv("DB_PASS", base.password),
            database=os.getenv("DB_NAME", base.database),
            ssl_mode=os.getenv("DB_SSL_MODE", base.ssl_mode),
            file=os.getenv("DB_FILE", base.file),
            mode=os.getenv("MCP_MODE", base.mode),
            server_host=os.getenv("MCP_HOST", base.server_host),
            server_port=_env_int("MCP_PORT", base.server_port),
            query_timeout=_env_float("QUERY_TIMEOUT", base.query_timeout),
            allow_execute_sql=_env_bool("ALLOW_EXECUTE_SQL", base.allow_execute_sql),
            log_level=os.getenv("LOG_LEVEL", base.log_level),
        )

    def override(self, **values) -> 'DatabaseConfig':
        """Copy with every value that is not None applied on top."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    @property
    def engine_kind(self) -> EngineKind:
        return resolve_engine_kind(self.db_type)

    @property
    def effective_port(self) -> Optional[int]:
        return self.port or DEFAULT_PORTS.get(self.engine_kind)

    def to_url(self) -> URL:
        kind = self.engine_kind
        if kind is EngineKind.SQLITE:
            return URL.create("sqlite", database=self.file)

        common = dict(
            username=self.username,
            password=self.password or None,
            host=self.host,
            port=self.effective_port,
            database=self.database,
        )
        if kind is EngineKind.MYSQL:
            return URL.create("mysql+pymysql", query={"charset": "utf8mb4"}, **common)
        if kind is EngineKind.POSTGRES:
            return URL.create("postgresql+psycopg2", query={"sslmode": self.ssl_mode}, **common)
        if kind is EngineKind.SQLSERVER:
            return URL.create("mssql+pymssql", **common)
        return URL.create("clickhouse+native", **common)

    def describe(self) -> str:
        """Connection target without credentials, for logs."""
        if self.engine_kind is EngineKind.SQLITE:
            return f"sqlite:///{self.file}"
        return f"{self.engine_kind.value}://{self.host}:{self.effective_port}/{self.database}"
