"""Book repository."""

from functools import lru_cache

from recordstore.core.store import Store
from recordstore.core.transaction import TransactionContext
from recordstore.entities.book.entity import Book
from recordstore.entities.book.schema import BOOK_SCHEMA
from recordstore.entities.book.table import BookTable


@lru_cache(maxsize=1)
def get_book_store() -> Store[Book]:
    """The store for books, checked against the table model once."""
    return Store(BOOK_SCHEMA, Book, BookTable)


class BookRepository:
    """Data-access layer for books within one transaction."""

    def __init__(self, txn: TransactionContext, store: Store[Book] | None = None) -> None:
        self._txn = txn
        self._store = store or get_book_store()

    def create(self, book: Book) -> Book:
        return self._store.persist(book, self._txn)

    def list_all(self, order_by: str | None = None, descending: bool = False) -> list[Book]:
        return self._store.find_all(self._txn, order_by=order_by, descending=descending)

    def count(self) -> int:
        return self._store.count(self._txn)

    def clear(self) -> int:
        return self._store.delete_all(self._txn)
