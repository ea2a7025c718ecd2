from .exceptions import (
    DbException,
    UnknownTable,
    UnknownColumn,
    UnknownIndex,
    DuplicateTable,
    DuplicateIndex,
    ColumnTypeMismatch,
    MissingRequiredColumn,
    UnsupportedOperation,
    UniqueViolation,
    SchemaValidationError,
)
from .row import Row
from .types import FieldType, Predicate, PredicateKind

__all__ = [
    "DbException",
    "UnknownTable",
    "UnknownColumn",
    "UnknownIndex",
    "DuplicateTable",
    "DuplicateIndex",
    "ColumnTypeMismatch",
    "MissingRequiredColumn",
    "UnsupportedOperation",
    "UniqueViolation",
    "SchemaValidationError",
    "Row",
    "FieldType",
    "Predicate",
    "PredicateKind",
]
