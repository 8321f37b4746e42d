"""Book API router."""

from fastapi import APIRouter, Depends, Query, status

from recordstore.api.http.deps import get_book_repository, get_transaction
from recordstore.core.transaction import TransactionContext
from recordstore.entities.book import Book, BookRepository

router = APIRouter(prefix="/books", tags=["books"])


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    book: Book,
    txn: TransactionContext = Depends(get_transaction),
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Create a new book."""
    created_book = repository.create(book)
    txn.commit()
    return created_book


@router.get("", response_model=list[Book])
def list_books(
    order_by: str | None = Query(default=None, description="Field to sort by"),
    descending: bool = Query(default=False),
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book]:
    """List all books."""
    return repository.list_all(order_by=order_by, descending=descending)


@router.delete("")
def delete_books(
    txn: TransactionContext = Depends(get_transaction),
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, int]:
    """Delete every book."""
    deleted = repository.clear()
    txn.commit()
    return {"deleted": deleted}
