from typing import Any, Optional

from ...core.exceptions import DbException
from ...core.iterator import AbstractDbIterator
from ...core.row import Row
from ...primitives import RowId
from ...storage.heap import RowStore
from ...storage.index import IndexStore
from .stats import ExecutionStats


class _RowFetcher(AbstractDbIterator[Row]):
    """Turns row ids coming from an index into rows from the row store."""

    def __init__(self, rows: RowStore, stats: Optional[ExecutionStats]):
        super().__init__()
        self.rows = rows
        self.stats = stats or ExecutionStats()

    def _fetch(self, row_id: RowId) -> Row:
        row = self.rows.get(row_id)
        if row is None:
            raise DbException(
                f"Index entry points to missing row {row_id} in '{self.rows.table.table_name}'")
        self.stats.rows_examined += 1
        self.stats.rows_returned += 1
        return row


class IndexLookupScan(_RowFetcher):
    """
    Equality lookup through a hash or ordered index.

    The matching row ids are resolved at open/rewind time; rows are then
    fetched lazily in row id order.
    """

    def __init__(self, rows: RowStore, indexes: IndexStore, index_name: str,
                 key: Any, stats: Optional[ExecutionStats] = None):
        super().__init__(rows, stats)
        self.indexes = indexes
        self.index_name = index_name
        self.key = key
        self._row_ids: list[RowId] = []
        self._position = 0

    def reset(self) -> None:
        self._row_ids = sorted(self.indexes.equality_lookup(self.index_name, self.key))
        self._position = 0
        self.stats.index_entries_read += len(self._row_ids)

    def read_next(self) -> Optional[Row]:
        if self._position >= len(self._row_ids):
            return None
        row_id = self._row_ids[self._position]
        self._position += 1
        return self._fetch(row_id)

    def __repr__(self) -> str:
        return f"IndexLookupScan({self.index_name!r}, {self.key!r})"


class IndexScan(_RowFetcher):
    """
    Rows in ascending key order, driven by an ordered range or prefix scan.
    """

    def __init__(self, rows: RowStore, row_ids: AbstractDbIterator[RowId],
                 stats: Optional[ExecutionStats] = None):
        super().__init__(rows, stats)
        self.row_ids = row_ids

    def open(self) -> None:
        self.row_ids.open()
        super().open()

    def reset(self) -> None:
        self.row_ids.rewind()

    def close(self) -> None:
        self.row_ids.close()
        super().close()

    def read_next(self) -> Optional[Row]:
        if not self.row_ids.has_next():
            return None
        row_id = self.row_ids.next()
        self.stats.index_entries_read += 1
        return self._fetch(row_id)

    def __repr__(self) -> str:
        return f"IndexScan({self.row_ids!r})"
