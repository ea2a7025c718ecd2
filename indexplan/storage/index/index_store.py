from collections.abc import Callable, Iterable, Mapping
from typing import Any, Optional

from ...catalog.table_info import IndexDef, IndexKind, TableMetadata
from ...core.exceptions import DbException, UnknownIndex
from ...core.iterator import AbstractDbIterator
from ...primitives import RowId
from ...util import make_logger
from .hash_index import HashIndex
from .index import Index
from .ordered_index import OrderedIndex


class IndexStore:
    """
    Manages the physical indexes of one table.

    Responsibilities:
    1. Create/drop index structures for the catalog's IndexDefs
    2. Keep every index consistent with row storage on insert/update/delete
    3. Serve equality lookups and ordered scans to the executor

    Every mutation is all-or-nothing for a single row: uniqueness is
    checked on every index before any entry is written, and entries
    already written are rolled back if a later write fails.
    """

    def __init__(self, table: TableMetadata, log: Callable[..., None] | None = None):
        self.table = table

        # index name -> Index, in registration order
        self._indexes: dict[str, Index] = {}
        self._log = log or make_logger(enabled=False)

    def add_index(self, index_def: IndexDef,
                  rows: Iterable[tuple[RowId, Mapping[str, Any]]] = ()) -> Index:
        """
        Build an index over the existing rows and register it.

        Building is all-or-nothing: if a row violates uniqueness the new
        index is discarded and the error propagates.
        """
        if index_def.index_name in self._indexes:
            raise DbException(
                f"Index '{index_def.index_name}' is already built on '{self.table.table_name}'")

        index = self._create_index(index_def)
        for row_id, row in rows:
            key = self._key_for(index, row)
            if key is not None:
                index.insert_entry(key, row_id)

        self._indexes[index_def.index_name] = index
        self._log(f"🌳 Built index '{index.name}' with {len(index)} entries")
        return index

    def drop_index(self, index_name: str) -> bool:
        return self._indexes.pop(index_name, None) is not None

    def get_index(self, index_name: str) -> Index:
        try:
            return self._indexes[index_name]
        except KeyError:
            raise UnknownIndex(
                f"Index '{index_name}' not found on table '{self.table.table_name}'")

    def indexes(self) -> list[Index]:
        return list(self._indexes.values())

    def insert(self, row_id: RowId, row: Mapping[str, Any]) -> None:
        """
        Add the row's entries to every index.

        Raises:
            UniqueViolation: If any unique index already holds the row's key;
                no index is modified in that case
        """
        planned = []
        for index in self._indexes.values():
            key = self._key_for(index, row)
            if key is not None:
                index.check_insert(key, row_id)
                planned.append((index, key))

        applied: list[Index] = []
        try:
            for index, key in planned:
                index.insert_entry(key, row_id)
                applied.append(index)
        except Exception:
            for index in applied:
                index.delete_entry(row_id)
            raise

    def replace(self, row_id: RowId, old_row: Mapping[str, Any],
                new_row: Mapping[str, Any]) -> None:
        """
        Swap a row's entries from old_row's keys to new_row's keys.

        Either every index ends up reflecting new_row or, on failure,
        every index still reflects old_row.
        """
        self.delete(row_id)
        try:
            self.insert(row_id, new_row)
        except Exception:
            self.insert(row_id, old_row)
            raise

    def delete(self, row_id: RowId) -> None:
        """Remove every entry referencing row_id. Absent rows are a no-op."""
        for index in self._indexes.values():
            index.delete_entry(row_id)

    def equality_lookup(self, index_name: str, key: Any) -> set[RowId]:
        """Row ids whose key equals key; valid for every index kind."""
        if key is None:
            return set()
        return self.get_index(index_name).find_equal(key)

    def range_scan(self, index_name: str, low: Any = None,
                   high: Any = None) -> AbstractDbIterator[RowId]:
        """
        Lazy, restartable scan of row ids with key in [low, high], ascending.

        Raises:
            UnsupportedOperation: On a hash index
        """
        return self.get_index(index_name).find_range(low, high)

    def prefix_scan(self, index_name: str, prefix: str) -> AbstractDbIterator[RowId]:
        """
        Lazy, restartable scan of row ids whose key starts with prefix.

        Raises:
            UnsupportedOperation: On a hash index
        """
        return self.get_index(index_name).find_prefix(prefix)

    def entry_count(self, index_name: str) -> int:
        return len(self.get_index(index_name))

    def contains(self, row_id: RowId) -> bool:
        """Check whether any index holds an entry for row_id."""
        return any(index.key_of(row_id) is not None
                   for index in self._indexes.values())

    def _key_for(self, index: Index, row: Mapping[str, Any]) -> Optional[Any]:
        column = self.table.get_column(index.index_def.column)
        value = row.get(column.name)
        if value is None:
            return None
        return column.field_type.to_key(value)

    @staticmethod
    def _create_index(index_def: IndexDef) -> Index:
        if index_def.kind is IndexKind.ORDERED:
            return OrderedIndex(index_def)
        if index_def.kind is IndexKind.HASH:
            return HashIndex(index_def)
        raise ValueError(f"Unknown index kind: {index_def.kind}")

    def __repr__(self) -> str:
        return f"IndexStore({self.table.table_name!r}, indexes={list(self._indexes)})"
