"""Per-engine SQL templates for schema introspection.

Adding an engine means writing one ``Dialect`` subclass and registering it;
callers only ever go through ``get_dialect``.
"""
from typing import Dict, Union

from ..errors import UnsupportedDialect
from .base import Dialect, EngineKind
from .clickhouse import ClickHouseDialect
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect
from .sqlserver import SQLServerDialect

# driver-level names that mean one of the supported engines
ALIASES = {
    "postgresql": EngineKind.POSTGRES,
    "mssql": EngineKind.SQLSERVER,
}

_registry: Dict[EngineKind, Dialect] = {}


def register_dialect(dialect: Dialect) -> None:
    _registry[dialect.kind] = dialect


def resolve_engine_kind(value: Union[str, EngineKind]) -> EngineKind:
    if isinstance(value, EngineKind):
        return value
    name = str(value).strip().lower()
    if name in ALIASES:
        return ALIASES[name]
    try:
        return EngineKind(name)
    except ValueError:
        raise UnsupportedDialect(str(value)) from None


def get_dialect(kind: Union[str, EngineKind]) -> Dialect:
    engine_kind = resolve_engine_kind(kind)
    try:
        return _registry[engine_kind]
    except KeyError:
        raise UnsupportedDialect(engine_kind.value) from None


for _dialect in (MySQLDialect(), PostgresDialect(), SQLiteDialect(), SQLServerDialect(), ClickHouseDialect()):
    register_dialect(_dialect)

__all__ = [
    "ALIASES",
    "ClickHouseDialect",
    "Dialect",
    "EngineKind",
    "MySQLDialect",
    "PostgresDialect",
    "SQLServerDialect",
    "SQLiteDialect",
    "get_dialect",
    "register_dialect",
    "resolve_engine_kind",
]
