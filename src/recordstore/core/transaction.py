"""Transaction contexts demarcating atomic units of work.

A ``TransactionContext`` owns one SQLModel session for its whole active
period. Writes made through the store are flushed into that session, so reads
issued on the same context see them immediately, while other contexts (each
on their own connection) only see them once ``commit`` succeeds.

Use it as a context manager to guarantee it never stays active::

    with db.transaction() as txn:
        store.persist(book, txn)
        books = store.find_all(txn)
    # committed here, or rolled back if the block raised
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from recordstore.core.errors import CommitError, IllegalStateError, ValidationError
from recordstore.core.schema import RecordSchema

if TYPE_CHECKING:
    from recordstore.entities._base import Entity

_counter = itertools.count(1)


class TransactionState(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

    @property
    def is_terminal(self) -> bool:
        return self in (TransactionState.COMMITTED, TransactionState.ROLLED_BACK)


@dataclass
class PendingWrite:
    """A record persisted in a transaction that has not committed yet."""

    schema: RecordSchema
    row: SQLModel
    record: Entity

    def sync(self) -> None:
        """Copy the record's current field values onto its row."""
        for spec in self.schema:
            if not spec.generated:
                setattr(self.row, spec.name, getattr(self.record, spec.name, None))


class TransactionContext:
    """Explicit begin/commit/rollback around one database session."""

    def __init__(
        self, session_factory: Callable[[], Session], name: str | None = None
    ) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        self._state = TransactionState.INACTIVE
        self._pending: list[PendingWrite] = []
        self.name = name or f"txn-{next(_counter)}"

    def __repr__(self) -> str:
        return f"<TransactionContext {self.name} {self._state.value}>"

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is TransactionState.ACTIVE

    @property
    def session(self) -> Session:
        """The session of the active transaction."""
        self._require_active("use the session of")
        if self._session is None:
            raise IllegalStateError(f"Transaction {self.name} has no open session")
        return self._session

    @property
    def pending(self) -> list[PendingWrite]:
        return list(self._pending)

    def begin(self) -> TransactionContext:
        if self._state is not TransactionState.INACTIVE:
            raise IllegalStateError(
                f"Cannot begin transaction {self.name}: it is {self._state.value}"
            )
        self._session = self._session_factory()
        self._state = TransactionState.ACTIVE
        logger.debug("Transaction {} started", self.name)
        return self

    def track(self, write: PendingWrite) -> None:
        """Register a persisted record so commit re-validates it."""
        self._require_active("register a write in")
        self._pending.append(write)

    def commit(self) -> None:
        """Apply every write of this transaction atomically.

        Raises:
            CommitError: a pending write violates its schema or the database
                refused the commit. The transaction is rolled back.
        """
        self._require_active("commit")
        session = self.session
        try:
            for write in self._pending:
                write.sync()
                write.schema.validate(write.row)
            session.commit()
        except (ValidationError, SQLAlchemyError) as e:
            logger.error(
                "Transaction {} failed to commit: {}: {}",
                self.name,
                type(e).__name__,
                e,
            )
            self._discard()
            raise CommitError(f"Transaction {self.name} rolled back: {e}") from e

        logger.debug(
            "Transaction {} committed ({} new records)", self.name, len(self._pending)
        )
        self._finish(TransactionState.COMMITTED)

    def rollback(self) -> None:
        """Discard every write of this transaction."""
        self._require_active("roll back")
        logger.debug(
            "Transaction {} rolling back ({} new records discarded)",
            self.name,
            len(self._pending),
        )
        self._discard()

    def __enter__(self) -> TransactionContext:
        if self._state is TransactionState.INACTIVE:
            self.begin()
        self._require_active("enter")
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc: Any, tb: Any) -> None:
        if self._state is not TransactionState.ACTIVE:
            return
        if exc_type is None:
            self.commit()
        else:
            logger.warning(
                "Rolling back transaction {} after {}", self.name, exc_type.__name__
            )
            self.rollback()

    def _require_active(self, action: str) -> None:
        if self._state is not TransactionState.ACTIVE:
            raise IllegalStateError(
                f"Cannot {action} transaction {self.name}: it is {self._state.value}"
            )

    def _discard(self) -> None:
        try:
            if self._session is not None:
                self._session.rollback()
        finally:
            # never durably persisted, so these records are transient again
            for write in self._pending:
                write.record._clear_identity()
            self._finish(TransactionState.ROLLED_BACK)

    def _finish(self, state: TransactionState) -> None:
        session, self._session = self._session, None
        self._pending.clear()
        self._state = state
        if session is not None:
            session.close()
