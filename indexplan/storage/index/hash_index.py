from typing import Any, Optional

from ...catalog.table_info import IndexDef
from ...primitives import RowId
from .index import Index


class HashIndex(Index):
    """
    Hash index: row ids grouped into buckets by key equality.

    - O(1) average case equality lookup
    - No key ordering, so range and prefix scans are unsupported
    """

    def __init__(self, index_def: IndexDef):
        super().__init__(index_def)

        # key -> row ids in insertion order (dict used as an ordered set)
        self._buckets: dict[Any, dict[RowId, None]] = {}
        self._keys: dict[RowId, Any] = {}

    def find_equal(self, key: Any) -> set[RowId]:
        return set(self._buckets.get(key, ()))

    def key_of(self, row_id: RowId) -> Optional[Any]:
        return self._keys.get(row_id)

    def bucket_count(self) -> int:
        return len(self._buckets)

    def __len__(self) -> int:
        return len(self._keys)

    def _insert(self, key: Any, row_id: RowId) -> None:
        self._delete(row_id)
        self._buckets.setdefault(key, {})[row_id] = None
        self._keys[row_id] = key

    def _delete(self, row_id: RowId) -> Optional[Any]:
        if row_id not in self._keys:
            return None

        key = self._keys.pop(row_id)
        bucket = self._buckets[key]
        del bucket[row_id]
        if not bucket:
            del self._buckets[key]
        return key
