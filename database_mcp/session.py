import logging
from contextlib import contextmanager
from typing import Iterator, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .config import DatabaseConfig
from .dialects import EngineKind
from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)


class DatabaseSession:
    """A live engine bound to one engine kind for the lifetime of the process.

    The session is handed to every introspection and execution call; it never
    lives in module state. Pooling and thread safety come from the SQLAlchemy
    engine.
    """

    def __init__(self, engine: Engine, engine_kind: Union[str, EngineKind]):
        self.engine = engine
        self._engine_kind = engine_kind.value if isinstance(engine_kind, EngineKind) else engine_kind

    @property
    def engine_kind(self) -> str:
        """Fixed when the session is created."""
        return self._engine_kind

    @classmethod
    def connect(cls, config: DatabaseConfig) -> 'DatabaseSession':
        url = config.to_url()
        try:
            engine = create_engine(url, pool_pre_ping=True)
            # Test connection
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                f"Failed to connect to {config.describe()}",
                details=str(getattr(e, "orig", None) or e)
            ) from e
        logger.info(f"Connected to database: {config.describe()}")
        return cls(engine, config.engine_kind)

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(
                "Database connection is unavailable",
                details=str(getattr(e, "orig", None) or e)
            ) from e
        with conn:
            yield conn

    @contextmanager
    def begin(self) -> Iterator[Connection]:
        """Connection inside a transaction that commits on success and rolls back on error."""
        with self.connection() as conn, conn.begin():
            yield conn

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")
