"""Book database table model."""

from sqlmodel import Field, SQLModel

from recordstore.entities.book.schema import BOOK_SCHEMA


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    Columns are built from ``BOOK_SCHEMA`` so that the table and the schema
    description the store validates against cannot drift apart. The identity
    column uses SQLite AUTOINCREMENT so ids of deleted rows are never reused.
    """

    __tablename__ = BOOK_SCHEMA.table_name
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, sa_column=BOOK_SCHEMA["id"].to_column())
    title: str = Field(sa_column=BOOK_SCHEMA["title"].to_column())
    price: float | None = Field(default=None, sa_column=BOOK_SCHEMA["price"].to_column())
    description: str | None = Field(
        default=None, sa_column=BOOK_SCHEMA["description"].to_column()
    )
    isbn: str | None = Field(default=None, sa_column=BOOK_SCHEMA["isbn"].to_column())
    page_count: int | None = Field(
        default=None, sa_column=BOOK_SCHEMA["page_count"].to_column()
    )
    has_illustrations: bool | None = Field(
        default=None, sa_column=BOOK_SCHEMA["has_illustrations"].to_column()
    )
