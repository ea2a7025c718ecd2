from collections.abc import Mapping
from typing import Any, Iterator

from ..primitives import RowId


class Row(Mapping):
    """
    Represents a single row of data in a table.

    A Row is a read-only mapping from column name to value, in schema
    order, tagged with the row id it was stored under. Rows are never
    mutated in place; an update replaces the whole row.
    """

    __slots__ = ("_row_id", "_values")

    def __init__(self, row_id: RowId, values: dict[str, Any]):
        self._row_id = row_id
        self._values = dict(values)

    @property
    def row_id(self) -> RowId:
        """Return the identifier this row is stored under."""
        return self._row_id

    def __getitem__(self, column: str) -> Any:
        return self._values[column]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict copy of the column values."""
        return dict(self._values)

    def __eq__(self, other: object) -> bool:
        """
        Two rows are equal if they have the same row id and values.
        """
        if not isinstance(other, Row):
            return NotImplemented
        return self._row_id == other._row_id and self._values == other._values

    def __hash__(self) -> int:
        return hash(self._row_id)

    def __str__(self) -> str:
        """Tab-separated string representation (database output format)."""
        return '\t'.join(str(v) for v in self._values.values())

    def __repr__(self) -> str:
        return f"Row({self._row_id}, {self._values})"
