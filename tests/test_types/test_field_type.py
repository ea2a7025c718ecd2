from datetime import datetime, timezone

import pytest

from indexplan.core.types import FieldType


class TestFieldType:
    """Tests for FieldType value checks and key normalization."""

    def test_int_accepts_ints_only(self):
        assert FieldType.INT.accepts(42)
        assert FieldType.INT.accepts(-1)
        assert not FieldType.INT.accepts("42")
        assert not FieldType.INT.accepts(4.2)

    def test_int_rejects_bool(self):
        """bool is a subclass of int but is not a valid integer value."""
        assert not FieldType.INT.accepts(True)

    def test_text_accepts_strings(self):
        assert FieldType.TEXT.accepts("hello")
        assert FieldType.TEXT.accepts("")
        assert not FieldType.TEXT.accepts(1)

    def test_timestamp_accepts_numbers_and_datetimes(self):
        assert FieldType.TIMESTAMP.accepts(5)
        assert FieldType.TIMESTAMP.accepts(1.5)
        assert FieldType.TIMESTAMP.accepts(datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert not FieldType.TIMESTAMP.accepts("2024-01-01")
        assert not FieldType.TIMESTAMP.accepts(False)

    def test_timestamp_key_normalizes_datetime(self):
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert FieldType.TIMESTAMP.to_key(moment) == moment.timestamp()
        assert FieldType.TIMESTAMP.to_key(7) == 7

    def test_other_types_keep_value_as_key(self):
        assert FieldType.INT.to_key(3) == 3
        assert FieldType.TEXT.to_key("abc") == "abc"

    def test_parse(self):
        assert FieldType.parse("int") is FieldType.INT
        assert FieldType.parse("TEXT") is FieldType.TEXT
        assert FieldType.parse("timestamp") is FieldType.TIMESTAMP

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown type"):
            FieldType.parse("blob")

    def test_timestamp_rejects_non_finite_floats(self):
        assert not FieldType.TIMESTAMP.accepts(float("nan"))
        assert not FieldType.TIMESTAMP.accepts(float("inf"))
        assert not FieldType.TIMESTAMP.accepts(float("-inf"))

    def test_timestamp_accepts_large_ints(self):
        assert FieldType.TIMESTAMP.accepts(10 ** 400)
