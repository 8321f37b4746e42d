"""Transactional record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from loguru import logger
from sqlalchemy import delete
from sqlmodel import SQLModel, func, select

from recordstore.core.errors import FieldViolation, IllegalStateError, ValidationError
from recordstore.core.schema import RecordSchema
from recordstore.core.transaction import PendingWrite, TransactionContext

if TYPE_CHECKING:
    from recordstore.entities._base import Entity

E = TypeVar("E", bound="Entity")


class Store(Generic[E]):
    """Create and bulk-query records of one type inside transactions.

    The store holds no data itself: every operation runs on the session of
    the transaction it is given, so changes only reach other transactions
    when that transaction commits.
    """

    def __init__(
        self, schema: RecordSchema, entity_type: type[E], table_type: type[SQLModel]
    ) -> None:
        schema.check_table(table_type.__table__)  # type: ignore[attr-defined]
        self.schema = schema
        self.entity_type = entity_type
        self.table_type = table_type
        logger.debug(
            "Store for {} bound to table '{}'", schema.entity, schema.table_name
        )

    def persist(self, record: E, txn: TransactionContext) -> E:
        """Insert ``record`` in ``txn`` and assign its identity.

        Raises:
            ValidationError: a required field is missing or a bound is exceeded.
            IllegalStateError: the record already has an identity, or ``txn``
                is not active.
        """
        if not isinstance(record, self.entity_type):
            raise TypeError(
                f"Expected {self.entity_type.__name__}, got {type(record).__name__}"
            )
        if record.id is not None:
            raise IllegalStateError(
                f"{self.schema.entity} {record.id} is already persisted"
            )
        self.schema.validate(record)

        session = txn.session
        row = self.table_type.model_validate(record, from_attributes=True)
        session.add(row)
        session.flush()

        identity = getattr(row, self.schema.identity.name)
        record._assign_identity(identity)
        txn.track(PendingWrite(schema=self.schema, row=row, record=record))
        logger.debug(
            "Persisted {} {} in transaction {}", self.schema.entity, identity, txn.name
        )
        return record

    def find_all(
        self,
        txn: TransactionContext,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[E]:
        """Return every record visible to ``txn``, including its own writes."""
        statement = select(self.table_type)
        if order_by is not None:
            if order_by not in self.schema:
                raise ValidationError(
                    self.schema.entity, [FieldViolation(order_by, "unknown field")]
                )
            column = getattr(self.table_type, order_by)
            statement = statement.order_by(column.desc() if descending else column.asc())

        rows = txn.session.exec(
            statement.execution_options(populate_existing=True)
        ).all()
        return [self.entity_type.model_validate(row, from_attributes=True) for row in rows]

    def count(self, txn: TransactionContext) -> int:
        statement = select(func.count()).select_from(self.table_type)
        return txn.session.exec(statement).one()

    def delete_all(self, txn: TransactionContext) -> int:
        """Delete every record visible to ``txn``; takes effect on commit."""
        session = txn.session
        removed = self.count(txn)
        session.exec(delete(self.table_type))  # type: ignore[call-overload]
        logger.debug(
            "Deleted {} {} records in transaction {}",
            removed,
            self.schema.entity,
            txn.name,
        )
        return removed
