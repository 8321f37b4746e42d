"""Entity package: Book."""

from .entity import Book
from .repository import BookRepository, get_book_store
from .schema import BOOK_SCHEMA
from .table import BookTable

__all__ = ["BOOK_SCHEMA", "Book", "BookRepository", "BookTable", "get_book_store"]
