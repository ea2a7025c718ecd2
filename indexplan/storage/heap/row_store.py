from collections.abc import Iterator, Mapping
from typing import Any, Optional

from ...catalog.table_info import TableMetadata
from ...core.exceptions import ColumnTypeMismatch, MissingRequiredColumn, UnknownColumn
from ...core.row import Row
from ...primitives import RowId, RowIdGenerator


class RowStore:
    """
    Row storage for one table: RowId -> Row, in insertion order.

    The store validates values against the table schema before anything
    is stored. It does not maintain indexes; the Database applies row and
    index changes together.
    """

    def __init__(self, table: TableMetadata):
        self.table = table
        self._rows: dict[RowId, Row] = {}
        self._row_ids = RowIdGenerator()

    def validate(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """
        Check values against the schema and return them in column order.

        Missing nullable columns are filled with None.

        Raises:
            UnknownColumn: If values name a column the table does not have
            MissingRequiredColumn: If a non-nullable column is absent or None
            ColumnTypeMismatch: If a value does not match its column type
        """
        unknown = [name for name in values if not self.table.has_column(name)]
        if unknown:
            raise UnknownColumn(
                f"Columns {unknown} not found in table '{self.table.table_name}'")

        row = {}
        for column in self.table.columns:
            value = values.get(column.name)
            if value is None:
                if not column.nullable:
                    raise MissingRequiredColumn(
                        f"Column '{column.name}' of table '{self.table.table_name}' is required")
            elif not column.field_type.accepts(value):
                raise ColumnTypeMismatch(
                    f"Column '{column.name}' expects {column.field_type.value}, "
                    f"got {type(value).__name__} {value!r}")
            row[column.name] = value
        return row

    def allocate(self, values: dict[str, Any]) -> Row:
        """Build a Row under a fresh id without storing it."""
        return Row(self._row_ids.next_id(), values)

    def put(self, row: Row) -> None:
        """Store (or replace) a row under its own id."""
        self._rows[row.row_id] = row

    def remove(self, row_id: RowId) -> Optional[Row]:
        """Remove and return a row; None if absent."""
        return self._rows.pop(row_id, None)

    def get(self, row_id: RowId) -> Optional[Row]:
        return self._rows.get(row_id)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def row_ids(self) -> list[RowId]:
        """Snapshot of the stored ids in insertion order."""
        return list(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(list(self._rows.values()))

    def items(self) -> Iterator[tuple[RowId, Row]]:
        return iter(list(self._rows.items()))
