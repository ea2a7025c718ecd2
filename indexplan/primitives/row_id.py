import threading
from typing import NewType

RowId = NewType("RowId", int)
"""Identifier of a row, unique within its table."""


class RowIdGenerator:
    """
    Hands out row ids for one table.

    Ids start at 1, increase monotonically and are never reused, even
    after the row they identified has been deleted.
    """

    def __init__(self, start: int = 1):
        if start < 1:
            raise ValueError(f"Row ids must be positive, got {start}")
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> RowId:
        with self._lock:
            row_id = RowId(self._next)
            self._next += 1
            return row_id

    def peek(self) -> RowId:
        """Return the id the next call to next_id() will produce."""
        with self._lock:
            return RowId(self._next)
