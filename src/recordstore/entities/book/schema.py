"""Schema description of the Book record."""

from recordstore.core.schema import ColumnSpec, RecordSchema

DESCRIPTION_MAX_LENGTH = 2000

BOOK_SCHEMA = RecordSchema(
    entity="Book",
    table_name="book",
    columns=(
        ColumnSpec("id", "id", int, primary_key=True, generated=True),
        ColumnSpec("title", "title", str, nullable=False),
        ColumnSpec("price", "price", float),
        ColumnSpec("description", "description", str, max_length=DESCRIPTION_MAX_LENGTH),
        ColumnSpec("isbn", "isbn", str),
        ColumnSpec("page_count", "nb_of_page", int),
        ColumnSpec("has_illustrations", "illustrations", bool),
    ),
)
