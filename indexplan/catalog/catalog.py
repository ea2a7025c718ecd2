import itertools
import threading
import time
from collections.abc import Callable, Iterable
from typing import Union

from ..core.exceptions import (
    DuplicateIndex,
    DuplicateTable,
    SchemaValidationError,
    UnknownColumn,
    UnknownIndex,
    UnknownTable,
    UnsupportedOperation,
)
from ..core.types import FieldType
from ..util import make_logger
from .table_info import ColumnDef, IndexDef, IndexKind, TableMetadata
from .schema_validator import SchemaValidator

ColumnSpec = Union[ColumnDef, tuple]


class Catalog:
    """
    In-memory catalog of tables, columns and index definitions.

    The catalog owns every ColumnDef and IndexDef. It never touches rows
    or physical index entries; those belong to the row and index stores,
    which look up their definitions here.

    Every DDL change bumps ``version`` so callers can cache decisions
    derived from the schema (such as access paths) and notice when they
    go stale.
    """

    def __init__(self, log: Callable[..., None] | None = None):
        # In-memory catalog state
        self._tables: dict[str, TableMetadata] = {}  # name -> metadata
        self._table_ids = itertools.count(1)

        # Schema validation
        self.validator = SchemaValidator()

        # Thread safety
        self._lock = threading.RLock()

        self._version = 0
        self._log = log or make_logger(enabled=False)

    @property
    def version(self) -> int:
        """Counter incremented on every schema change."""
        return self._version

    def define_table(self, table_name: str, columns: Iterable[ColumnSpec],
                     table_comment: str = "") -> TableMetadata:
        """
        Add a new table to the catalog with full validation.

        Args:
            table_name: Name of the table
            columns: ColumnDef objects or ``(name, type[, nullable])`` tuples,
                where type is a FieldType or its string value
            table_comment: Optional comment describing the table

        Returns:
            TableMetadata for the created table

        Raises:
            DuplicateTable: If a table with this name exists
            SchemaValidationError: If the definition is invalid
        """
        with self._lock:
            if table_name in self._tables:
                raise DuplicateTable(f"Table '{table_name}' already exists")

            metadata = TableMetadata(
                table_name=table_name,
                table_id=next(self._table_ids),
                columns=[self._coerce_column(c) for c in columns],
                created_at=time.time(),
                modified_at=time.time(),
                table_comment=table_comment,
            )

            if not self.validator.validate_table_creation(metadata):
                errors = self.validator.get_validation_errors()
                raise SchemaValidationError(
                    f"Table creation failed: {'; '.join(errors)}")

            self._tables[table_name] = metadata
            self._version += 1

            schema = ", ".join(
                f"{c.name} {c.field_type.value}" for c in metadata.columns)
            self._log(f"✅ Added table '{table_name}' ({schema})")
            return metadata

    def define_index(self, table_name: str, index_name: str, column: str,
                     kind: IndexKind | str = IndexKind.ORDERED,
                     unique: bool = False) -> IndexDef:
        """
        Add an index definition to a table.

        Args:
            table_name: Table to add index to
            index_name: Name of the index, unique within the table
            column: Column covered by the index
            kind: IndexKind or its string value
            unique: Whether index enforces uniqueness

        Raises:
            UnknownTable: If the table does not exist
            UnknownColumn: If the column is not in the table schema
            DuplicateIndex: If an index of that name already exists
        """
        with self._lock:
            metadata = self.get_table_metadata(table_name)

            if not metadata.has_column(column):
                raise UnknownColumn(
                    f"Column '{column}' not found in table '{table_name}'")

            if index_name in metadata.indexes:
                raise DuplicateIndex(
                    f"Index '{index_name}' already exists on table '{table_name}'")

            try:
                kind = IndexKind(kind)
            except ValueError:
                raise UnsupportedOperation(f"Unknown index kind: {kind!r}")

            index_def = IndexDef(
                index_name=index_name,
                table_name=table_name,
                column=column,
                kind=kind,
                unique=unique,
            )

            metadata.add_index(index_def)
            self._version += 1

            self._log(
                f"📊 Added {index_def.kind.value} index '{index_name}' on {table_name}({column})")
            return index_def

    def indexes_on(self, table_name: str, column: str) -> list[IndexDef]:
        """Return the index definitions covering a column, in registration order."""
        with self._lock:
            metadata = self.get_table_metadata(table_name)
            if not metadata.has_column(column):
                raise UnknownColumn(
                    f"Column '{column}' not found in table '{table_name}'")
            return metadata.indexes_on(column)

    def get_index(self, table_name: str, index_name: str) -> IndexDef:
        with self._lock:
            metadata = self.get_table_metadata(table_name)
            if index_name not in metadata.indexes:
                raise UnknownIndex(
                    f"Index '{index_name}' not found on table '{table_name}'")
            return metadata.indexes[index_name]

    def get_table_metadata(self, table_name: str) -> TableMetadata:
        """Get complete metadata for a table."""
        with self._lock:
            if table_name not in self._tables:
                raise UnknownTable(f"Table '{table_name}' not found in catalog")
            return self._tables[table_name]

    def get_column(self, table_name: str, column: str) -> ColumnDef:
        """Get a column definition."""
        return self.get_table_metadata(table_name).get_column(column)

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists."""
        with self._lock:
            return table_name in self._tables

    def list_tables(self) -> list[str]:
        """Get list of all table names."""
        with self._lock:
            return list(self._tables.keys())

    def drop_table(self, table_name: str) -> bool:
        """
        Drop a table and its index definitions from the catalog.

        Returns:
            True if table was dropped, False if it did not exist
        """
        with self._lock:
            if table_name not in self._tables:
                return False

            del self._tables[table_name]
            self._version += 1

            self._log(f"🗑️  Dropped table '{table_name}' from catalog")
            return True

    def drop_index(self, table_name: str, index_name: str) -> bool:
        """
        Drop an index definition.

        Returns:
            True if index was dropped, False if not found
        """
        with self._lock:
            metadata = self.get_table_metadata(table_name)
            if not metadata.remove_index(index_name):
                return False

            self._version += 1
            self._log(f"🗑️  Dropped index '{index_name}' on table '{table_name}'")
            return True

    def to_dict(self) -> dict:
        with self._lock:
            return {name: meta.to_dict() for name, meta in self._tables.items()}

    def tables(self) -> dict[str, TableMetadata]:
        """Return a snapshot of the name -> metadata map."""
        with self._lock:
            return dict(self._tables)

    @staticmethod
    def _coerce_column(spec: ColumnSpec) -> ColumnDef:
        if isinstance(spec, ColumnDef):
            return spec

        if not isinstance(spec, tuple) or len(spec) not in (2, 3):
            raise SchemaValidationError(f"Invalid column definition: {spec!r}")

        name, field_type = spec[0], spec[1]
        nullable = spec[2] if len(spec) == 3 else True
        if isinstance(field_type, str):
            try:
                field_type = FieldType.parse(field_type)
            except ValueError as e:
                raise SchemaValidationError(str(e))

        return ColumnDef(name, field_type, nullable)

    def __str__(self) -> str:
        with self._lock:
            return f"Catalog({len(self._tables)} tables)"

    def __repr__(self) -> str:
        return self.__str__()
