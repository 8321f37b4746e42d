"""Entities organized by business concept.

Each entity has its own package containing:
- schema.py: explicit field-to-column description used for validation
- entity.py: domain model
- table.py: database persistence model, built from the schema
- repository.py: data access within a transaction
"""

from .book import BOOK_SCHEMA, Book, BookRepository, BookTable

__all__ = ["BOOK_SCHEMA", "Book", "BookRepository", "BookTable"]
