"""
IndexPlan: an in-memory table store with ordered and hash indexes and a
rule-based access path planner.
"""
from .catalog import ColumnDef, IndexDef, IndexKind, TableMetadata
from .config import DatabaseConfig
from .core import (
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
    FieldType,
    Predicate,
    PredicateKind,
    Row,
)
from .database import Database
from .query import AccessPath, AccessPathKind, ExecutionStats

__version__ = "0.1.0"

__all__ = [
    "Database",
    "DatabaseConfig",
    "ColumnDef",
    "IndexDef",
    "IndexKind",
    "TableMetadata",
    "FieldType",
    "Predicate",
    "PredicateKind",
    "Row",
    "AccessPath",
    "AccessPathKind",
    "ExecutionStats",
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
]
