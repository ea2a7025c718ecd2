import pytest

from indexplan.catalog.table_info import IndexDef, IndexKind
from indexplan.core.exceptions import UniqueViolation, UnsupportedOperation
from indexplan.primitives import RowId
from indexplan.storage.index import HashIndex


class TestHashIndex:
    """Tests for HashIndex."""

    def setup_method(self):
        self.index = HashIndex(IndexDef("email_idx", "users", "email", IndexKind.HASH))
        self.index.insert_entry("a@x.com", RowId(1))
        self.index.insert_entry("b@x.com", RowId(2))
        self.index.insert_entry("a@x.com", RowId(3))

    def test_find_equal(self):
        assert self.index.find_equal("a@x.com") == {1, 3}
        assert self.index.find_equal("b@x.com") == {2}
        assert self.index.find_equal("c@x.com") == set()

    def test_bucket_count(self):
        assert self.index.bucket_count() == 2
        assert len(self.index) == 3

    def test_delete_removes_empty_bucket(self):
        self.index.delete_entry(RowId(2))
        assert self.index.bucket_count() == 1
        assert self.index.find_equal("b@x.com") == set()

    def test_delete_missing_is_noop(self):
        assert self.index.delete_entry(RowId(99)) is None
        assert len(self.index) == 3

    def test_range_scan_unsupported(self):
        with pytest.raises(UnsupportedOperation, match="range"):
            self.index.find_range("a", "z")

    def test_prefix_scan_unsupported(self):
        with pytest.raises(UnsupportedOperation, match="prefix"):
            self.index.find_prefix("a")

    def test_unique_violation(self):
        index = HashIndex(IndexDef("email_idx", "users", "email", IndexKind.HASH, unique=True))
        index.insert_entry("a@x.com", RowId(1))
        with pytest.raises(UniqueViolation):
            index.insert_entry("a@x.com", RowId(2))
        assert index.find_equal("a@x.com") == {1}
        assert index.key_of(RowId(2)) is None

    def test_repr(self):
        assert repr(self.index) == "HashIndex('email_idx', column='email', entries=3)"
