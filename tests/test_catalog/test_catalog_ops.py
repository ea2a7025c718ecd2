import io

import pytest

from indexplan.catalog import Catalog, ColumnDef, IndexKind
from indexplan.core.exceptions import (
    DuplicateIndex,
    DuplicateTable,
    SchemaValidationError,
    UnknownColumn,
    UnknownIndex,
    UnknownTable,
    UnsupportedOperation,
)
from indexplan.core.types import FieldType
from indexplan.util import make_logger


class TestCatalog:
    """Test suite for the Catalog class."""

    def setup_method(self):
        self.catalog = Catalog()
        self.users_columns = [
            ColumnDef("id", FieldType.INT, nullable=False),
            ColumnDef("email", FieldType.TEXT),
            ColumnDef("created", FieldType.TIMESTAMP),
        ]

    # =============================================================================
    # TABLE TESTS
    # =============================================================================

    def test_define_table_basic(self):
        metadata = self.catalog.define_table("users", self.users_columns)

        assert metadata.table_name == "users"
        assert metadata.column_names == ["id", "email", "created"]
        assert self.catalog.table_exists("users")
        assert self.catalog.list_tables() == ["users"]

    def test_define_table_from_tuples(self):
        metadata = self.catalog.define_table(
            "events", [("id", "int", False), ("ts", FieldType.TIMESTAMP)])

        assert metadata.get_column("id") == ColumnDef("id", FieldType.INT, False)
        assert metadata.get_column("ts").nullable

    def test_table_ids_are_unique(self):
        a = self.catalog.define_table("a", [("x", "int")])
        b = self.catalog.define_table("b", [("x", "int")])
        assert a.table_id != b.table_id

    def test_duplicate_table(self):
        self.catalog.define_table("users", self.users_columns)
        with pytest.raises(DuplicateTable, match="already exists"):
            self.catalog.define_table("users", self.users_columns)

    def test_duplicate_column_names_rejected(self):
        with pytest.raises(SchemaValidationError, match="Duplicate column names"):
            self.catalog.define_table("t", [("a", "int"), ("a", "text")])
        assert not self.catalog.table_exists("t")

    def test_empty_column_list_rejected(self):
        with pytest.raises(SchemaValidationError, match="at least one column"):
            self.catalog.define_table("t", [])

    def test_unknown_type_rejected(self):
        with pytest.raises(SchemaValidationError, match="Unknown type"):
            self.catalog.define_table("t", [("a", "blob")])

    def test_malformed_column_spec_rejected(self):
        with pytest.raises(SchemaValidationError, match="Invalid column definition"):
            self.catalog.define_table("t", [("a",)])

    def test_get_unknown_table(self):
        with pytest.raises(UnknownTable):
            self.catalog.get_table_metadata("nope")

    def test_drop_table(self):
        self.catalog.define_table("users", self.users_columns)
        assert self.catalog.drop_table("users")
        assert not self.catalog.table_exists("users")
        assert not self.catalog.drop_table("users")

    # =============================================================================
    # INDEX TESTS
    # =============================================================================

    def test_define_index(self):
        self.catalog.define_table("users", self.users_columns)
        index_def = self.catalog.define_index(
            "users", "email_idx", "email", IndexKind.HASH, unique=True)

        assert index_def.table_name == "users"
        assert index_def.column == "email"
        assert index_def.kind is IndexKind.HASH
        assert index_def.unique
        assert index_def.created_at > 0

    def test_define_index_accepts_kind_string(self):
        self.catalog.define_table("users", self.users_columns)
        index_def = self.catalog.define_index("users", "id_idx", "id", "ordered")
        assert index_def.kind is IndexKind.ORDERED

    def test_define_index_unknown_kind(self):
        self.catalog.define_table("users", self.users_columns)
        with pytest.raises(UnsupportedOperation, match="Unknown index kind"):
            self.catalog.define_index("users", "id_idx", "id", "gist")

    def test_define_index_unknown_column(self):
        self.catalog.define_table("users", self.users_columns)
        with pytest.raises(UnknownColumn, match="'age'"):
            self.catalog.define_index("users", "age_idx", "age")
        assert self.catalog.get_table_metadata("users").indexes == {}

    def test_define_index_unknown_table(self):
        with pytest.raises(UnknownTable):
            self.catalog.define_index("nope", "idx", "id")

    def test_duplicate_index(self):
        self.catalog.define_table("users", self.users_columns)
        self.catalog.define_index("users", "idx", "id")
        with pytest.raises(DuplicateIndex):
            self.catalog.define_index("users", "idx", "email")

    def test_same_index_name_on_different_tables(self):
        self.catalog.define_table("a", [("x", "int")])
        self.catalog.define_table("b", [("x", "int")])
        self.catalog.define_index("a", "x_idx", "x")
        self.catalog.define_index("b", "x_idx", "x")

    def test_indexes_on_registration_order(self):
        self.catalog.define_table("users", self.users_columns)
        self.catalog.define_index("users", "email_ordered", "email", IndexKind.ORDERED)
        self.catalog.define_index("users", "id_idx", "id")
        self.catalog.define_index("users", "email_hash", "email", IndexKind.HASH)

        names = [i.index_name for i in self.catalog.indexes_on("users", "email")]
        assert names == ["email_ordered", "email_hash"]
        assert self.catalog.indexes_on("users", "created") == []

    def test_indexes_on_unknown_column(self):
        self.catalog.define_table("users", self.users_columns)
        with pytest.raises(UnknownColumn):
            self.catalog.indexes_on("users", "age")

    def test_get_index(self):
        self.catalog.define_table("users", self.users_columns)
        self.catalog.define_index("users", "idx", "id")
        assert self.catalog.get_index("users", "idx").column == "id"
        with pytest.raises(UnknownIndex):
            self.catalog.get_index("users", "other")

    def test_drop_index(self):
        self.catalog.define_table("users", self.users_columns)
        self.catalog.define_index("users", "idx", "id")
        assert self.catalog.drop_index("users", "idx")
        assert not self.catalog.drop_index("users", "idx")
        assert self.catalog.indexes_on("users", "id") == []

    # =============================================================================
    # VERSIONING AND LOGGING
    # =============================================================================

    def test_version_bumps_on_ddl(self):
        start = self.catalog.version
        self.catalog.define_table("users", self.users_columns)
        after_table = self.catalog.version
        self.catalog.define_index("users", "idx", "id")
        after_index = self.catalog.version
        self.catalog.drop_index("users", "idx")

        assert start < after_table < after_index < self.catalog.version

    def test_failed_ddl_keeps_version(self):
        self.catalog.define_table("users", self.users_columns)
        version = self.catalog.version
        with pytest.raises(UnknownColumn):
            self.catalog.define_index("users", "idx", "nope")
        assert self.catalog.version == version

    def test_logs_ddl_when_enabled(self):
        out = io.StringIO()
        catalog = Catalog(log=make_logger(enabled=True, file=out))
        catalog.define_table("users", self.users_columns)
        catalog.define_index("users", "email_idx", "email", IndexKind.HASH)

        text = out.getvalue()
        assert "Added table 'users'" in text
        assert "hash index 'email_idx' on users(email)" in text

    def test_to_dict(self):
        self.catalog.define_table("users", self.users_columns)
        self.catalog.define_index("users", "idx", "id")
        data = self.catalog.to_dict()
        assert data["users"]["indexes"]["idx"]["kind"] == "ordered"
        assert data["users"]["columns"][0] == {
            "name": "id", "field_type": "int", "nullable": False}

    def test_str(self):
        assert str(self.catalog) == "Catalog(0 tables)"
