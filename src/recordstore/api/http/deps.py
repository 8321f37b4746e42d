"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request

from recordstore.api.http.app_data import ApplicationDependencies
from recordstore.core.services import DbSessionService
from recordstore.core.transaction import TransactionContext
from recordstore.entities.book import BookRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_transaction(
    db: DbSessionService = Depends(get_database_service),
) -> Iterator[TransactionContext]:
    """One transaction per request; committed unless the handler raised."""
    with db.transaction() as txn:
        yield txn


def get_book_repository(
    txn: TransactionContext = Depends(get_transaction),
) -> BookRepository:
    return BookRepository(txn)
