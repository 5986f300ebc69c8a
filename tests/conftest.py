import sqlite3
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine

from database_mcp.session import DatabaseSession

DB_ENV_VARS = (
    "DB_TYPE", "DB_HOST", "DB_PORT", "DB_USER", "DB_PASS", "DB_NAME", "DB_SSL_MODE",
    "DB_FILE", "MCP_MODE", "MCP_HOST", "MCP_PORT", "QUERY_TIMEOUT", "ALLOW_EXECUTE_SQL",
    "LOG_LEVEL", "DB_CONFIG",
)


@pytest.fixture()
def sqlite_db_path(tmp_path):
    db_path = tmp_path / "fixture.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "CREATE TABLE users ("
            " id INTEGER PRIMARY KEY AUTOINCREMENT,"
            " name TEXT NOT NULL,"
            " email VARCHAR(120),"
            " age INTEGER DEFAULT 18)"
        )
        conn.execute(
            "CREATE TABLE orders ("
            " id INTEGER PRIMARY KEY,"
            " user_id INTEGER NOT NULL,"
            " total NUMERIC(10, 2),"
            " created_at TEXT DEFAULT CURRENT_TIMESTAMP)"
        )
        conn.executemany(
            "INSERT INTO users (name, email, age) VALUES (?, ?, ?)",
            [("Ada", "ada@example.com", 36), ("Linus", None, 45), ("Grace", "grace@example.com", 50)],
        )
        conn.execute("INSERT INTO orders (user_id, total) VALUES (1, 12.5)")
        conn.commit()
    finally:
        conn.close()
    return db_path


@pytest.fixture()
def sqlite_session(sqlite_db_path):
    engine = create_engine(f"sqlite:///{sqlite_db_path}")
    session = DatabaseSession(engine, "sqlite")
    yield session
    session.close()


@pytest.fixture()
def mock_connection():
    return MagicMock(name="connection")


def make_mock_session(engine_kind, connection):
    engine = MagicMock(name="engine")
    engine.connect.return_value = connection
    return DatabaseSession(engine, engine_kind)


def rows_result(rows):
    result = MagicMock(name="result")
    result.mappings.return_value = rows
    return result


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for name in DB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # no config.yaml in the working directory
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture()
def anyio_backend():
    return "asyncio"
