import json

import pytest

from indexplan.catalog import Catalog, CatalogPersistence, IndexKind
from indexplan.core.exceptions import DbException


class TestCatalogPersistence:
    """Tests for saving and loading schema files."""

    def setup_method(self):
        self.catalog = Catalog()
        self.catalog.define_table("users", [("id", "int", False), ("email", "text")])
        self.catalog.define_index("users", "email_idx", "email", IndexKind.HASH, unique=True)
        self.catalog.define_table("events", [("ts", "timestamp")])

    def test_save_and_load(self, tmp_path):
        persistence = CatalogPersistence(tmp_path / "schema.json")
        persistence.save(self.catalog.tables())

        tables = persistence.load()
        assert [t.table_name for t in tables] == ["users", "events"]
        assert tables[0].indexes["email_idx"].unique
        assert tables[0].get_column("id").nullable is False

    def test_save_creates_parent_dirs_and_no_temp_file(self, tmp_path):
        target = tmp_path / "nested" / "schema.json"
        CatalogPersistence(target).save(self.catalog.tables())
        assert target.exists()
        assert not target.with_suffix(".tmp").exists()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DbException, match="not found"):
            CatalogPersistence(tmp_path / "missing.json").load()

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json")
        with pytest.raises(DbException, match="Failed to load schema"):
            CatalogPersistence(path).load()

    def test_load_wrong_version(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"version": "9.9", "tables": []}))
        with pytest.raises(DbException, match="Unsupported schema version"):
            CatalogPersistence(path).load()

    def test_load_malformed_table(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"version": "1.0", "tables": [{"table_name": "t"}]}))
        with pytest.raises(DbException, match="Malformed"):
            CatalogPersistence(path).load()
