"""Custom exceptions for the index planner."""


class DbException(Exception):
    """Base exception for database-related errors."""
    pass


class UnknownTable(DbException):
    """Raised when a table name is not registered in the catalog."""
    pass


class UnknownColumn(DbException):
    """Raised when a column is not part of the table schema."""
    pass


class UnknownIndex(DbException):
    """Raised when an index name is not registered on the table."""
    pass


class DuplicateTable(DbException):
    """Raised when a table with the same name already exists."""
    pass


class DuplicateIndex(DbException):
    """Raised when an index with the same name already exists on the table."""
    pass


class ColumnTypeMismatch(DbException, TypeError):
    """Raised when a value or predicate literal does not match the column type."""
    pass


class MissingRequiredColumn(DbException):
    """Raised when a non-nullable column is absent or None."""
    pass


class UnsupportedOperation(DbException):
    """Raised when an index kind cannot serve the requested operation."""
    pass


class UniqueViolation(DbException):
    """Raised when a unique index already holds the key."""
    pass


class SchemaValidationError(DbException):
    """Raised when a table definition fails validation."""
    pass
