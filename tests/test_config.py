import textwrap

import pytest

from database_mcp.__main__ import load_config, main, parse_args
from database_mcp.config import DatabaseConfig, load_config_file, parse_addr
from database_mcp.dialects import EngineKind
from database_mcp.errors import UnsupportedDialect


def test_defaults(clean_env):
    # Validates the fallback values used when nothing is configured.
    config = DatabaseConfig.from_env()

    assert config.db_type == "mysql"
    assert config.host == "localhost"
    assert config.effective_port == 3306
    assert config.mode == "stdio"
    assert config.allow_execute_sql is True
    assert config.query_timeout is None


def test_from_env(clean_env):
    # Validates environment-driven configuration.
    # Arrange
    clean_env.setenv("DB_TYPE", "postgres")
    clean_env.setenv("DB_HOST", "db.internal")
    clean_env.setenv("DB_USER", "reporter")
    clean_env.setenv("DB_PASS", "s3cret")
    clean_env.setenv("DB_NAME", "analytics")
    clean_env.setenv("DB_SSL_MODE", "require")
    clean_env.setenv("MCP_MODE", "http")
    clean_env.setenv("QUERY_TIMEOUT", "2.5")
    clean_env.setenv("ALLOW_EXECUTE_SQL", "false")

    # Act
    config = DatabaseConfig.from_env()

    # Assert
    assert config.engine_kind is EngineKind.POSTGRES
    assert config.effective_port == 5432
    assert config.mode == "sse"
    assert config.query_timeout == 2.5
    assert config.allow_execute_sql is False


@pytest.mark.parametrize(
    "db_type, drivername, port",
    [
        ("mysql", "mysql+pymysql", 3306),
        ("postgres", "postgresql+psycopg2", 5432),
        ("sqlserver", "mssql+pymssql", 1433),
        ("clickhouse", "clickhouse+native", 9000),
    ],
)
def test_to_url_per_engine(db_type, drivername, port):
    # Validates connection URL assembly for each networked engine.
    url = DatabaseConfig(db_type=db_type, username="u", password="p", database="d").to_url()

    assert url.drivername == drivername
    assert url.port == port
    assert (url.username, url.password, url.database) == ("u", "p", "d")


def test_to_url_engine_options():
    # Validates engine-specific URL options.
    assert DatabaseConfig(db_type="mysql").to_url().query["charset"] == "utf8mb4"
    assert DatabaseConfig(db_type="postgres", ssl_mode="verify-full").to_url().query["sslmode"] == "verify-full"


def test_to_url_sqlite_uses_file():
    # Validates that sqlite ignores host settings and uses the file path.
    url = DatabaseConfig(db_type="sqlite", file="/data/app.db").to_url()

    assert url.drivername == "sqlite"
    assert url.database == "/data/app.db"
    assert url.host is None


def test_to_url_unsupported_engine():
    # Validates that unknown engines fail at startup.
    with pytest.raises(UnsupportedDialect):
        DatabaseConfig(db_type="oracle").to_url()


def test_explicit_port_wins():
    assert DatabaseConfig(db_type="mysql", port=3307).effective_port == 3307


def test_invalid_mode():
    # Validates transport mode checking.
    with pytest.raises(ValueError):
        DatabaseConfig(mode="carrier-pigeon")


@pytest.mark.parametrize(
    "addr, expected",
    [(":8080", ("0.0.0.0", 8080)), ("127.0.0.1:9000", ("127.0.0.1", 9000))],
)
def test_parse_addr(addr, expected):
    assert parse_addr(addr) == expected


@pytest.mark.parametrize("addr", ["8080", "host:", "host:http"])
def test_parse_addr_rejects_garbage(addr):
    with pytest.raises(ValueError):
        parse_addr(addr)


def test_flags_override_environment(clean_env):
    # Validates flag precedence because the command line must win over .env values.
    # Arrange
    clean_env.setenv("DB_TYPE", "mysql")
    clean_env.setenv("DB_HOST", "from-env")
    args = parse_args([
        "--db-type", "sqlite",
        "--db-file", "local.db",
        "--mode", "streamable-http",
        "--addr", ":9100",
        "--disable-execute-sql",
        "--log-level", "debug",
    ])

    # Act
    config = load_config(args)

    # Assert
    assert config.engine_kind is EngineKind.SQLITE
    assert config.file == "local.db"
    assert config.host == "from-env"
    assert config.mode == "streamable-http"
    assert (config.server_host, config.server_port) == ("0.0.0.0", 9100)
    assert config.allow_execute_sql is False
    assert config.log_level == "DEBUG"


def test_config_is_frozen():
    # Validates that configuration cannot change after assembly.
    config = DatabaseConfig()

    with pytest.raises(Exception):
        config.db_type = "sqlite"


def test_log_level_is_normalized():
    assert DatabaseConfig(log_level=" warning ").log_level == "WARNING"


def test_invalid_log_level():
    # Validates log level checking because logging.basicConfig would otherwise fail after startup began.
    with pytest.raises(ValueError):
        DatabaseConfig(log_level="LOUD")


def _write_config(path, body):
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return str(path)


def test_config_file_database_section(clean_env, tmp_path):
    # Validates that the database section of a YAML file fills the configuration.
    # Arrange
    path = _write_config(tmp_path / "db.yaml", """
        database:
          type: postgres
          host: pg.internal
          port: 6543
          username: reporter
          password: 1234
          database: analytics
          ssl_mode: require
          mode: http
          addr: ":9200"
          query_timeout: 3
          allow_execute_sql: false
        """)

    # Act
    config = DatabaseConfig.from_env(path)

    # Assert
    assert config.engine_kind is EngineKind.POSTGRES
    assert (config.host, config.effective_port) == ("pg.internal", 6543)
    assert (config.username, config.password, config.database) == ("reporter", "1234", "analytics")
    assert config.to_url().query["sslmode"] == "require"
    assert config.mode == "sse"
    assert (config.server_host, config.server_port) == ("0.0.0.0", 9200)
    assert config.query_timeout == 3.0
    assert config.allow_execute_sql is False


def test_config_file_layers_under_env_and_flags(clean_env, tmp_path):
    # Validates precedence because the file is the base layer: env beats file, flags beat env.
    # Arrange
    path = _write_config(tmp_path / "db.yaml", """
        database:
          type: mysql
          host: from-file
          database: filedb
          username: fileuser
        """)
    clean_env.setenv("DB_CONFIG", path)
    clean_env.setenv("DB_HOST", "from-env")
    clean_env.setenv("DB_NAME", "envdb")
    args = parse_args(["--db-name", "flagdb"])

    # Act
    config = load_config(args)

    # Assert
    assert config.username == "fileuser"
    assert config.host == "from-env"
    assert config.database == "flagdb"


def test_config_flag_names_the_file(clean_env, tmp_path):
    path = _write_config(tmp_path / "other.yaml", """
        database:
          type: sqlite
          file: /data/app.db
        """)

    config = load_config(parse_args(["--config", path]))

    assert config.engine_kind is EngineKind.SQLITE
    assert config.file == "/data/app.db"


def test_default_config_file_is_read_when_present(clean_env, tmp_path):
    # clean_env runs the test inside tmp_path
    _write_config(tmp_path / "config.yaml", """
        database:
          host: default-file
        """)

    assert DatabaseConfig.from_env().host == "default-file"


def test_missing_default_config_file_is_ignored(clean_env):
    assert load_config_file() == {}


def test_missing_named_config_file(clean_env, tmp_path):
    with pytest.raises(ValueError, match="not found"):
        DatabaseConfig.from_env(str(tmp_path / "absent.yaml"))


@pytest.mark.parametrize(
    "body",
    ["database: [mysql, postgres]\n", "- database\n", "database:\n  host: [unclosed\n"],
)
def test_malformed_config_file(clean_env, tmp_path, body):
    # Validates that a broken config file is reported as a configuration error.
    path = _write_config(tmp_path / "bad.yaml", body)

    with pytest.raises(ValueError):
        load_config_file(path)


def test_main_exits_2_on_missing_config_file(clean_env, tmp_path):
    assert main(["--config", str(tmp_path / "absent.yaml")]) == 2
