"""Record store core: schema descriptions, transactions and the store."""

from .errors import (
    CommitError,
    FieldViolation,
    IllegalStateError,
    SchemaError,
    StoreError,
    ValidationError,
)
from .schema import ColumnSpec, RecordSchema
from .store import Store
from .transaction import PendingWrite, TransactionContext, TransactionState

__all__ = [
    "ColumnSpec",
    "CommitError",
    "FieldViolation",
    "IllegalStateError",
    "PendingWrite",
    "RecordSchema",
    "SchemaError",
    "Store",
    "StoreError",
    "TransactionContext",
    "TransactionState",
    "ValidationError",
]
