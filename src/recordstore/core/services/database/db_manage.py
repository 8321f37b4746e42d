"""Table management for the record store."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def _register_tables(self) -> None:
        from recordstore.entities.book import BookTable  # noqa: F401

    def create_all(self) -> None:
        """Create all missing database tables."""
        self._register_tables()
        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        self._register_tables()
        SQLModel.metadata.drop_all(self._engine)
        logger.info("Database tables dropped.")
