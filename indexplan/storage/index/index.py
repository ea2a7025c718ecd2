from abc import ABC, abstractmethod
from typing import Any, Optional

from ...catalog.table_info import IndexDef
from ...core.exceptions import UniqueViolation, UnsupportedOperation
from ...core.iterator import AbstractDbIterator
from ...primitives import RowId


class Index(ABC):
    """
    Abstract base class for in-memory indexes.

    An Index provides:
    1. Key-based lookup: find RowIds for a given key
    2. Range and prefix scans (ordered indexes only)
    3. Maintenance: insert/delete (key, RowId) entries

    Keys are already normalized by the caller and are never None; NULL
    column values are not indexed at all.

    Implementations:
    - OrderedIndex: sorted entries, supports ranges
    - HashIndex: buckets by key, equality only
    """

    def __init__(self, index_def: IndexDef):
        self.index_def = index_def

        # Bumped on every mutation so open scans can detect changes
        self._modifications = 0

    @property
    def name(self) -> str:
        return self.index_def.index_name

    @property
    def unique(self) -> bool:
        return self.index_def.unique

    @property
    def modifications(self) -> int:
        return self._modifications

    def check_insert(self, key: Any, row_id: RowId) -> None:
        """
        Verify that (key, row_id) could be inserted without changing anything.

        Raises:
            UniqueViolation: If the index is unique and another row holds the key
        """
        if not self.unique:
            return
        holders = self.find_equal(key)
        if holders and holders != {row_id}:
            raise UniqueViolation(
                f"Duplicate key {key!r} violates unique index '{self.name}'")

    def insert_entry(self, key: Any, row_id: RowId) -> None:
        """
        Insert a new key-RowId pair.

        Raises:
            UniqueViolation: If the index is unique and the key is taken
        """
        self.check_insert(key, row_id)
        self._insert(key, row_id)
        self._modifications += 1

    def delete_entry(self, row_id: RowId) -> Optional[Any]:
        """
        Delete the entry for row_id.

        Returns:
            The key that was removed, or None if the row was not indexed
        """
        key = self._delete(row_id)
        if key is not None:
            self._modifications += 1
        return key

    def find_range(self, low: Any = None, high: Any = None) -> AbstractDbIterator[RowId]:
        """
        Scan RowIds whose key lies in [low, high], in ascending key order.

        Raises:
            UnsupportedOperation: If the index does not keep keys ordered
        """
        raise UnsupportedOperation(
            f"Index '{self.name}' ({self.index_def.kind.value}) does not support range scans")

    def find_prefix(self, prefix: str) -> AbstractDbIterator[RowId]:
        """
        Scan RowIds whose text key starts with prefix, in ascending key order.

        Raises:
            UnsupportedOperation: If the index does not keep keys ordered
        """
        raise UnsupportedOperation(
            f"Index '{self.name}' ({self.index_def.kind.value}) does not support prefix scans")

    @abstractmethod
    def find_equal(self, key: Any) -> set[RowId]:
        """Find all RowIds with exactly the given key."""
        pass

    @abstractmethod
    def key_of(self, row_id: RowId) -> Optional[Any]:
        """Return the key indexed for row_id, or None if absent."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        """Number of (key, RowId) entries."""
        pass

    @abstractmethod
    def _insert(self, key: Any, row_id: RowId) -> None:
        pass

    @abstractmethod
    def _delete(self, row_id: RowId) -> Optional[Any]:
        pass

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.name!r}, column={self.index_def.column!r}, "
                f"entries={len(self)})")
