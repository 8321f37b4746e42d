"""A small transactional record store built on SQLModel."""

__version__ = "0.1.0"
