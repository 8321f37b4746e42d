"""Explicit schema descriptions for stored records.

A ``RecordSchema`` maps each field of a domain entity to a column of its
table model, together with the column type and constraints. Table models build
their columns from it (``ColumnSpec.to_column``) and the ``Store`` consumes it
at initialization to check the table and to validate records before they are
written.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

import sqlalchemy as sa

from recordstore.core.errors import FieldViolation, SchemaError, ValidationError

_SA_TYPES: dict[type, type[sa.types.TypeEngine]] = {
    str: sa.String,
    int: sa.Integer,
    float: sa.Float,
    bool: sa.Boolean,
}


@dataclass(frozen=True)
class ColumnSpec:
    """Mapping of one entity field to one table column."""

    name: str
    column: str
    type: type
    nullable: bool = True
    max_length: int | None = None
    primary_key: bool = False
    generated: bool = False

    def __post_init__(self) -> None:
        if self.type not in _SA_TYPES:
            raise SchemaError(f"Unsupported column type {self.type!r} for '{self.name}'")
        if self.max_length is not None and self.type is not str:
            raise SchemaError(f"max_length only applies to text columns ('{self.name}')")

    @property
    def required(self) -> bool:
        return not self.nullable and not self.generated

    def sa_type(self) -> sa.types.TypeEngine:
        if self.type is str:
            return sa.String(self.max_length) if self.max_length else sa.Text()
        return _SA_TYPES[self.type]()

    def to_column(self) -> sa.Column:
        """Build a fresh SQLAlchemy column for a table model."""
        if self.primary_key:
            return sa.Column(
                self.column,
                self.sa_type(),
                primary_key=True,
                autoincrement=self.generated,
            )
        return sa.Column(self.column, self.sa_type(), nullable=self.nullable)

    def check(self, value: Any) -> FieldViolation | None:
        """Return the violation for ``value``, if any."""
        if value is None:
            if self.required:
                return FieldViolation(self.name, "is required")
            return None

        # bool is a subclass of int; keep the two apart
        if self.type is int and isinstance(value, bool):
            return FieldViolation(self.name, "must be an integer")
        if self.type is float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if not isinstance(value, self.type):
            return FieldViolation(self.name, f"must be of type {self.type.__name__}")

        if self.type is str:
            if self.required and not value.strip():
                return FieldViolation(self.name, "must not be empty")
            if self.max_length is not None and len(value) > self.max_length:
                return FieldViolation(
                    self.name, f"must be at most {self.max_length} characters"
                )
        return None


@dataclass(frozen=True)
class RecordSchema:
    """Schema description of one record type."""

    entity: str
    table_name: str
    columns: tuple[ColumnSpec, ...]
    _by_name: Mapping[str, ColumnSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        by_name = {spec.name: spec for spec in self.columns}
        if len(by_name) != len(self.columns):
            raise SchemaError(f"Duplicate field names in schema '{self.entity}'")
        keys = [spec for spec in self.columns if spec.primary_key]
        if len(keys) != 1:
            raise SchemaError(
                f"Schema '{self.entity}' must declare exactly one primary key, got {len(keys)}"
            )
        object.__setattr__(self, "_by_name", by_name)

    def __iter__(self) -> Iterator[ColumnSpec]:
        return iter(self.columns)

    def __getitem__(self, name: str) -> ColumnSpec:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Schema '{self.entity}' has no field '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def identity(self) -> ColumnSpec:
        return next(spec for spec in self.columns if spec.primary_key)

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.columns]

    def violations(self, record: Any) -> list[FieldViolation]:
        """Collect every constraint violation of ``record`` (entity or row)."""
        found = []
        for spec in self.columns:
            if spec.generated:
                continue
            violation = spec.check(getattr(record, spec.name, None))
            if violation is not None:
                found.append(violation)
        return found

    def validate(self, record: Any) -> None:
        """Raise ``ValidationError`` if ``record`` violates the schema."""
        found = self.violations(record)
        if found:
            raise ValidationError(self.entity, found)

    def check_table(self, table: sa.Table) -> None:
        """Verify that ``table`` matches this description."""
        if table.name != self.table_name:
            raise SchemaError(
                f"Schema '{self.entity}' expects table '{self.table_name}', got '{table.name}'"
            )
        for spec in self.columns:
            column = next((c for c in table.columns if c.name == spec.column), None)
            if column is None:
                raise SchemaError(
                    f"Table '{table.name}' has no column '{spec.column}' for field '{spec.name}'"
                )
            if column.primary_key != spec.primary_key:
                raise SchemaError(f"Primary key mismatch on column '{spec.column}'")
            if not spec.primary_key and column.nullable != spec.nullable:
                raise SchemaError(f"Nullability mismatch on column '{spec.column}'")
