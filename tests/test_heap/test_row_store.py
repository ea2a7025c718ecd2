from datetime import datetime

import pytest

from indexplan.catalog.table_info import ColumnDef, TableMetadata
from indexplan.core.exceptions import ColumnTypeMismatch, MissingRequiredColumn, UnknownColumn
from indexplan.core.types import FieldType
from indexplan.storage.heap import RowStore


class TestRowStore:
    """Tests for RowStore validation and storage."""

    def setup_method(self):
        self.table = TableMetadata(
            table_name="events",
            table_id=1,
            columns=[
                ColumnDef("id", FieldType.INT, nullable=False),
                ColumnDef("name", FieldType.TEXT),
                ColumnDef("ts", FieldType.TIMESTAMP),
            ],
        )
        self.store = RowStore(self.table)

    def test_validate_orders_and_fills_columns(self):
        values = self.store.validate({"ts": 5, "id": 1})
        assert list(values) == ["id", "name", "ts"]
        assert values["name"] is None

    def test_validate_accepts_datetime_timestamp(self):
        moment = datetime(2024, 5, 1)
        assert self.store.validate({"id": 1, "ts": moment})["ts"] == moment

    def test_missing_required_column(self):
        with pytest.raises(MissingRequiredColumn, match="'id'"):
            self.store.validate({"name": "x"})

    def test_explicit_none_for_required_column(self):
        with pytest.raises(MissingRequiredColumn):
            self.store.validate({"id": None})

    def test_type_mismatch(self):
        with pytest.raises(ColumnTypeMismatch, match="expects int"):
            self.store.validate({"id": "1"})

    def test_type_mismatch_is_a_type_error(self):
        with pytest.raises(TypeError):
            self.store.validate({"id": 1, "name": 5})

    def test_unknown_column(self):
        with pytest.raises(UnknownColumn, match="color"):
            self.store.validate({"id": 1, "color": "red"})

    def test_allocate_does_not_store(self):
        row = self.store.allocate(self.store.validate({"id": 1}))
        assert row.row_id == 1
        assert row.row_id not in self.store
        assert len(self.store) == 0

    def test_put_get_remove(self):
        row = self.store.allocate(self.store.validate({"id": 1}))
        self.store.put(row)
        assert self.store.get(row.row_id) == row
        assert self.store.remove(row.row_id) == row
        assert self.store.get(row.row_id) is None
        assert self.store.remove(row.row_id) is None

    def test_row_ids_not_reused(self):
        first = self.store.allocate(self.store.validate({"id": 1}))
        self.store.put(first)
        self.store.remove(first.row_id)
        second = self.store.allocate(self.store.validate({"id": 2}))
        assert second.row_id == first.row_id + 1

    def test_iteration_in_insertion_order(self):
        for i in (3, 1, 2):
            self.store.put(self.store.allocate(self.store.validate({"id": i})))
        assert [row["id"] for row in self.store] == [3, 1, 2]
        assert self.store.row_ids() == [1, 2, 3]
