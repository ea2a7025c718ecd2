import threading
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional

from .catalog import Catalog, CatalogPersistence
from .catalog.catalog import ColumnSpec
from .catalog.table_info import IndexDef, IndexKind, TableMetadata
from .config import DEFAULT_CONFIG, DatabaseConfig
from .core.exceptions import UnknownTable
from .core.iterator import AbstractDbIterator
from .core.row import Row
from .core.types import Predicate
from .primitives import RowId
from .query import AccessPath, ExecutionStats, Executor, Planner
from .storage import Table
from .util import make_logger


class Database:
    """
    In-process entry point tying the catalog, storage and query layers together.

    Components:

    1. **Catalog**: table, column and index definitions
    2. **Tables**: per-table row store, index store and readers-writer lock
    3. **Planner**: rule-based access path choice
    4. **Executor**: runs access paths against storage

    Architecture:
    ```
    Database
    ├── Catalog (definitions, versioned)
    ├── Planner (LRU cache of access path decisions)
    ├── Executor (SeqScan / IndexLookupScan / IndexScan)
    └── Table per name
        ├── RowStore (RowId -> Row)
        ├── IndexStore (OrderedIndex / HashIndex)
        └── ReadWriteLock
    ```

    Writes (insert, update, delete, index creation) hold the table's
    write lock for the duration of one row or one index build, so row
    storage and indexes always change together. Queries hold the read
    lock while collecting their results.
    """

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._log = make_logger(enabled=self.config.verbose)

        self._catalog = Catalog(log=self._log)
        self._planner = Planner(self._catalog, cache_size=self.config.plan_cache_size)
        self._executor = Executor()

        self._tables: dict[str, Table] = {}
        self._tables_lock = threading.RLock()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def planner(self) -> Planner:
        return self._planner

    # ------------------------------------------------------------------
    # DDL
    # ------------------------------------------------------------------

    def define_table(self, table_name: str, columns: Iterable[ColumnSpec],
                     table_comment: str = "") -> TableMetadata:
        """
        Create an empty table.

        Raises:
            DuplicateTable: If the name is taken
            SchemaValidationError: If the column list is invalid
        """
        with self._tables_lock:
            metadata = self._catalog.define_table(table_name, columns, table_comment)
            self._tables[table_name] = Table.create(
                metadata, lock_timeout=self.config.lock_timeout, log=self._log)
            return metadata

    def define_index(self, table_name: str, index_name: str, column: str,
                     kind: IndexKind | str = IndexKind.ORDERED,
                     unique: bool = False) -> IndexDef:
        """
        Register an index and build it over the rows already in the table.

        Raises:
            UnknownColumn: If column is not in the table
            DuplicateIndex: If the table already has an index of that name
            UniqueViolation: If unique and existing rows share a key; the
                index is not registered in that case
        """
        table = self._table(table_name)
        with table.lock.write_locked():
            index_def = self._catalog.define_index(
                table_name, index_name, column, kind, unique)
            try:
                table.indexes.add_index(index_def, table.rows.items())
            except Exception:
                self._catalog.drop_index(table_name, index_name)
                raise
            return index_def

    def drop_index(self, table_name: str, index_name: str) -> bool:
        table = self._table(table_name)
        with table.lock.write_locked():
            table.indexes.drop_index(index_name)
            return self._catalog.drop_index(table_name, index_name)

    def drop_table(self, table_name: str) -> bool:
        with self._tables_lock:
            table = self._tables.get(table_name)
            if table is None:
                return False
            with table.lock.write_locked():
                del self._tables[table_name]
                return self._catalog.drop_table(table_name)

    # ------------------------------------------------------------------
    # DML
    # ------------------------------------------------------------------

    def insert_row(self, table_name: str, values: Mapping[str, Any]) -> RowId:
        """
        Insert a row and index it.

        Raises:
            ColumnTypeMismatch: If a value does not match its column type
            MissingRequiredColumn: If a non-nullable column is missing
            UnknownColumn: If values name a column the table lacks
            UniqueViolation: If a unique index already holds one of the keys
        """
        table = self._table(table_name)
        with table.lock.write_locked():
            row = table.rows.allocate(table.rows.validate(values))
            table.indexes.insert(row.row_id, row)
            table.rows.put(row)
            table.metadata.update_statistics(len(table.rows))
            return row.row_id

    def update_row(self, table_name: str, row_id: RowId,
                   changes: Mapping[str, Any]) -> Optional[Row]:
        """
        Replace a row with a copy that has the given columns changed.

        Returns:
            The new row, or None if row_id does not exist
        """
        table = self._table(table_name)
        with table.lock.write_locked():
            old_row = table.rows.get(row_id)
            if old_row is None:
                return None

            merged = {**old_row.to_dict(), **changes}
            new_row = Row(row_id, table.rows.validate(merged))
            table.indexes.replace(row_id, old_row, new_row)
            table.rows.put(new_row)
            table.metadata.update_statistics(len(table.rows))
            return new_row

    def delete_row(self, table_name: str, row_id: RowId) -> bool:
        """
        Delete a row and its index entries.

        Returns:
            True if a row was deleted, False if row_id did not exist
        """
        table = self._table(table_name)
        with table.lock.write_locked():
            if row_id not in table.rows:
                return False
            table.indexes.delete(row_id)
            table.rows.remove(row_id)
            table.metadata.update_statistics(len(table.rows))
            return True

    def get_row(self, table_name: str, row_id: RowId) -> Optional[Row]:
        table = self._table(table_name)
        with table.lock.read_locked():
            return table.rows.get(row_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def query(self, table_name: str, predicate: Predicate) -> list[Row]:
        """
        Return the rows matching predicate.

        Rows come back in ascending key order when an ordered range scan is
        chosen; otherwise the order is unspecified.

        Raises:
            UnknownColumn: If the predicate column is not in the table
            ColumnTypeMismatch: If a literal does not match the column type
        """
        rows, _, _ = self._run(table_name, predicate)
        return rows

    def scan(self, table_name: str, predicate: Predicate) -> AbstractDbIterator[Row]:
        """
        Return a lazy, restartable operator for predicate.

        The path is planned and the operator built under the read lock; no
        lock is held while the caller iterates. Writes or index DDL on the
        table during the scan make it fail with DbException.
        """
        table = self._table(table_name)
        with table.lock.read_locked():
            path = self._planner.plan(table_name, predicate)
            return self._executor.execute(path, table)

    def explain(self, table_name: str, predicate: Predicate) -> AccessPath:
        """Return the access path query() would use, without running it."""
        table = self._table(table_name)
        with table.lock.read_locked():
            return self._planner.plan(table_name, predicate)

    def explain_analyze(self, table_name: str,
                        predicate: Predicate) -> tuple[AccessPath, ExecutionStats]:
        """Run the query and return its access path with execution counters."""
        _, path, stats = self._run(table_name, predicate)
        return path, stats

    def table_statistics(self, table_name: str) -> dict:
        """Get statistics for a table."""
        table = self._table(table_name)
        with table.lock.read_locked():
            metadata = table.metadata
            return {
                "table_name": metadata.table_name,
                "row_count": len(table.rows),
                "created_at": metadata.created_at,
                "modified_at": metadata.modified_at,
                "indexes": {index.name: len(index) for index in table.indexes.indexes()},
            }

    # ------------------------------------------------------------------
    # Schema files
    # ------------------------------------------------------------------

    def export_schema(self, path: str | Path) -> Path:
        """Write table and index definitions (not rows) to a JSON file."""
        saved = CatalogPersistence(path).save(self._catalog.tables())
        self._log(f"💾 Exported schema to {saved}")
        return saved

    @classmethod
    def from_schema_file(cls, path: str | Path,
                         config: Optional[DatabaseConfig] = None) -> 'Database':
        """Create a database with the tables and indexes of a schema file, all empty."""
        db = cls(config)
        for metadata in CatalogPersistence(path).load():
            db.define_table(metadata.table_name, metadata.columns, metadata.table_comment)
            for index_def in metadata.indexes.values():
                db.define_index(metadata.table_name, index_def.index_name,
                                index_def.column, index_def.kind, index_def.unique)
        db._log(f"📖 Loaded schema with {len(db._tables)} tables from {path}")
        return db

    def _run(self, table_name: str,
             predicate: Predicate) -> tuple[list[Row], AccessPath, ExecutionStats]:
        table = self._table(table_name)
        stats = ExecutionStats()
        # planned under the lock so index DDL cannot invalidate the path
        with table.lock.read_locked():
            path = self._planner.plan(table_name, predicate)
            rows = list(self._executor.execute(path, table, stats))
        return rows, path, stats

    def _table(self, table_name: str) -> Table:
        with self._tables_lock:
            try:
                return self._tables[table_name]
            except KeyError:
                raise UnknownTable(f"Table '{table_name}' not found in catalog")

    def __repr__(self) -> str:
        return f"Database({self._catalog})"
