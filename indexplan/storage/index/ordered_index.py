import bisect
from typing import Any, Optional

from ...catalog.table_info import IndexDef
from ...core.exceptions import DbException
from ...core.iterator import AbstractDbIterator
from ...primitives import RowId
from .index import Index


def _entry_key(entry: tuple) -> Any:
    return entry[0]


class OrderedIndex(Index):
    """
    Ordered index: (key, RowId) entries kept sorted by key, then RowId.

    Lookups and scan start positions are found by binary search, so an
    equality lookup costs O(log n) and a range scan O(log n + k).
    Inserting or deleting shifts the underlying list and costs O(n).
    """

    def __init__(self, index_def: IndexDef):
        super().__init__(index_def)
        self._entries: list[tuple[Any, RowId]] = []
        self._keys: dict[RowId, Any] = {}

    def find_equal(self, key: Any) -> set[RowId]:
        lo = bisect.bisect_left(self._entries, key, key=_entry_key)
        hi = bisect.bisect_right(self._entries, key, lo=lo, key=_entry_key)
        return {row_id for _, row_id in self._entries[lo:hi]}

    def find_range(self, low: Any = None, high: Any = None) -> 'IndexRangeScan':
        return IndexRangeScan(self, low, high)

    def find_prefix(self, prefix: str) -> 'IndexPrefixScan':
        return IndexPrefixScan(self, prefix)

    def key_of(self, row_id: RowId) -> Optional[Any]:
        return self._keys.get(row_id)

    def entry_at(self, position: int) -> tuple[Any, RowId]:
        return self._entries[position]

    def lower_bound(self, key: Any) -> int:
        """Position of the first entry whose key is >= key."""
        return bisect.bisect_left(self._entries, key, key=_entry_key)

    def min_key(self) -> Optional[Any]:
        return self._entries[0][0] if self._entries else None

    def max_key(self) -> Optional[Any]:
        return self._entries[-1][0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def _insert(self, key: Any, row_id: RowId) -> None:
        self._delete(row_id)
        bisect.insort(self._entries, (key, row_id))
        self._keys[row_id] = key

    def _delete(self, row_id: RowId) -> Optional[Any]:
        if row_id not in self._keys:
            return None

        key = self._keys.pop(row_id)
        position = bisect.bisect_left(self._entries, (key, row_id))
        del self._entries[position]
        return key


class _OrderedScan(AbstractDbIterator[RowId]):
    """
    Base for lazy scans over a contiguous run of an OrderedIndex.

    The scan reads entries by position, so it fails with DbException if
    the index is modified while the scan is in progress rather than
    silently skipping or repeating entries. Rewinding re-reads the index
    and picks up changes made since the last pass.
    """

    def __init__(self, index: OrderedIndex):
        super().__init__()
        self.index = index
        self._position = 0
        self._end = 0
        self._seen_modifications = index.modifications
        self.entries_read = 0

    def reset(self) -> None:
        self._position = self._start_position()
        self._end = len(self.index)
        self._seen_modifications = self.index.modifications

    def read_next(self) -> Optional[RowId]:
        if self.index.modifications != self._seen_modifications:
            raise DbException(
                f"Index '{self.index.name}' was modified during a scan")

        if self._position >= self._end:
            return None

        key, row_id = self.index.entry_at(self._position)
        if not self._in_bounds(key):
            self._position = self._end
            return None

        self._position += 1
        self.entries_read += 1
        return row_id

    def _start_position(self) -> int:
        raise NotImplementedError

    def _in_bounds(self, key: Any) -> bool:
        raise NotImplementedError


class IndexRangeScan(_OrderedScan):
    """Row ids whose key lies in [low, high]; None leaves a side open."""

    def __init__(self, index: OrderedIndex, low: Any = None, high: Any = None):
        super().__init__(index)
        self.low = low
        self.high = high

    def _start_position(self) -> int:
        return 0 if self.low is None else self.index.lower_bound(self.low)

    def _in_bounds(self, key: Any) -> bool:
        return self.high is None or key <= self.high

    def __repr__(self) -> str:
        return f"IndexRangeScan({self.index.name!r}, {self.low!r}, {self.high!r})"


class IndexPrefixScan(_OrderedScan):
    """Row ids whose text key starts with a prefix."""

    def __init__(self, index: OrderedIndex, prefix: str):
        super().__init__(index)
        self.prefix = prefix

    def _start_position(self) -> int:
        return self.index.lower_bound(self.prefix)

    def _in_bounds(self, key: Any) -> bool:
        return key.startswith(self.prefix)

    def __repr__(self) -> str:
        return f"IndexPrefixScan({self.index.name!r}, {self.prefix!r})"
