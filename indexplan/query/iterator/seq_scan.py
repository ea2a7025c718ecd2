from typing import Optional

from ...core.iterator import AbstractDbIterator
from ...core.row import Row
from ...core.types import FieldType, Predicate
from ...primitives import RowId
from ...storage.heap import RowStore
from .stats import ExecutionStats


class SeqScan(AbstractDbIterator[Row]):
    """
    SeqScan is an implementation of a sequential scan access method.

    This operator reads every row of a table in storage order and keeps
    the ones the predicate accepts.

    Key Characteristics:
    1. Full table scan: examines every row in the table
    2. No key ordering: rows come back in row id order
    3. Works for every predicate kind, with or without indexes
    """

    def __init__(self, rows: RowStore, predicate: Predicate, field_type: FieldType,
                 stats: Optional[ExecutionStats] = None):
        """
        Create a sequential scan over a table's rows.

        Args:
            rows: The table's row storage
            predicate: Predicate with literals already normalized to keys
            field_type: Type of the predicate column, used to normalize row values
            stats: Counters to update while scanning
        """
        super().__init__()
        self.rows = rows
        self.predicate = predicate
        self.field_type = field_type
        self.stats = stats or ExecutionStats()
        self._row_ids: list[RowId] = []
        self._position = 0

    def reset(self) -> None:
        """Snapshot the row ids present right now and start from the first."""
        self._row_ids = self.rows.row_ids()
        self._position = 0

    def read_next(self) -> Optional[Row]:
        column = self.predicate.column

        while self._position < len(self._row_ids):
            row = self.rows.get(self._row_ids[self._position])
            self._position += 1
            if row is None:
                # deleted after the snapshot was taken
                continue

            self.stats.rows_examined += 1
            value = row[column]
            key = None if value is None else self.field_type.to_key(value)
            if self.predicate.matches(key):
                self.stats.rows_returned += 1
                return row

        return None

    def __repr__(self) -> str:
        return f"SeqScan({self.rows.table.table_name!r}, {self.predicate})"
