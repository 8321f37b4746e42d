"""Error types raised by the record store."""

from __future__ import annotations

from dataclasses import dataclass


class StoreError(Exception):
    """Base class for all record store errors."""


@dataclass(frozen=True)
class FieldViolation:
    """A single constraint violation on one field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(StoreError):
    """A record violates its schema (missing required field, bound exceeded)."""

    def __init__(self, entity: str, violations: list[FieldViolation]) -> None:
        self.entity = entity
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid {entity}: {details}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class IllegalStateError(StoreError):
    """An operation was called in a state that does not permit it."""


class CommitError(StoreError):
    """Commit failed; the transaction has been rolled back."""


class SchemaError(StoreError):
    """A schema description does not match its table model."""
