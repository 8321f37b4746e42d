"""Database engine and transaction factory."""

from typing import Any

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from recordstore.core.transaction import TransactionContext
from recordstore.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        """Create the shared database engine for ``db_config``."""
        self._config = db_config
        self._environment = environment

        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "connect_args": self._get_connect_args(),
        }
        if db_config.is_memory:
            # one shared connection, so every session sees the same database
            engine_kwargs["poolclass"] = StaticPool
            logger.warning(
                "In-memory SQLite shares one connection between transactions; "
                "concurrent transactions are not isolated from each other."
            )
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                    "pool_pre_ping": True,
                }
            )

        logger.info(
            "Initializing {} database engine for environment: {}",
            db_config.backend,
            environment,
        )
        self._engine = create_engine(db_config.url, **engine_kwargs)

        if db_config.backend == "sqlite":
            event.listen(self._engine, "connect", self._configure_sqlite_connection)

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def config(self) -> DatabaseConfig:
        return self._config

    def _get_connect_args(self) -> dict:
        """Get database-specific connection arguments."""
        connect_args: dict[str, Any] = {}

        if self._config.backend == "sqlite":
            connect_args.update(
                {
                    "check_same_thread": False,
                    "timeout": self._config.busy_timeout,
                }
            )

            if self._environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better concurrency."
                )

        elif self._config.backend == "postgresql":
            connect_args["connect_timeout"] = self._config.pool_timeout

        return connect_args

    def _configure_sqlite_connection(self, dbapi_connection, connection_record) -> None:
        # WAL lets readers proceed while another connection holds the write lock
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute(f"PRAGMA journal_mode={self._config.journal_mode}")
        finally:
            cursor.close()

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    def transaction(self, name: str | None = None) -> TransactionContext:
        """Return a new, not yet begun, transaction context."""
        return TransactionContext(self.get_session, name=name)

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed: {}: {}", type(e).__name__, e
            )
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
