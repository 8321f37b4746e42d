"""Entity: Book."""

from typing import Any

from pydantic import Field

from recordstore.entities._base import Entity


class Book(Entity):
    """Book entity representing a book in the store.

    Fields are loosely typed so that an incomplete book can be built and
    filled in before it is persisted; the store validates it against
    ``BOOK_SCHEMA`` at persist and commit time.
    """

    title: str | None = Field(default=None, description="Title")
    price: float | None = Field(default=None, description="Price")
    description: str | None = Field(default=None, description="Description")
    isbn: str | None = Field(default=None, description="ISBN")
    page_count: int | None = Field(default=None, description="Number of pages")
    has_illustrations: bool | None = Field(
        default=None, description="Whether the book is illustrated"
    )

    def __eq__(self, other: Any) -> bool:
        """Compare books by identity and business attributes."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.price == other.price
            and self.description == other.description
            and self.isbn == other.isbn
            and self.page_count == other.page_count
            and self.has_illustrations == other.has_illustrations
        )

    def __hash__(self) -> int:
        """Hash based on identity and business attributes."""
        return hash((
            self.id,
            self.title,
            self.price,
            self.description,
            self.isbn,
            self.page_count,
            self.has_illustrations,
        ))

    def __str__(self) -> str:
        return (
            f"Book [id={self.id}, title={self.title}, price={self.price}, "
            f"description={self.description}, isbn={self.isbn}, "
            f"page_count={self.page_count}, has_illustrations={self.has_illustrations}]"
        )
