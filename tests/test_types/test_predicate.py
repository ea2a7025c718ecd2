from datetime import datetime, timezone

from indexplan.core.types import FieldType, Predicate, PredicateKind


class TestPredicate:
    """Tests for the Predicate variant."""

    def test_constructors_set_kind(self):
        assert Predicate.equality("a", 1).kind is PredicateKind.EQUALITY
        assert Predicate.range("a", 1, 2).kind is PredicateKind.RANGE
        assert Predicate.prefix("a", "x").kind is PredicateKind.PREFIX

    def test_equality_matches(self):
        predicate = Predicate.equality("email", "a@x.com")
        assert predicate.matches("a@x.com")
        assert not predicate.matches("b@x.com")

    def test_range_is_inclusive(self):
        predicate = Predicate.range("ts", 2, 5)
        assert predicate.matches(2)
        assert predicate.matches(5)
        assert predicate.matches(3)
        assert not predicate.matches(1)
        assert not predicate.matches(6)

    def test_open_range_bounds(self):
        assert Predicate.range("ts", None, 5).matches(-100)
        assert Predicate.range("ts", 5, None).matches(10 ** 9)
        assert not Predicate.range("ts", 5, None).matches(4)

    def test_prefix_matches(self):
        predicate = Predicate.prefix("email", "ab")
        assert predicate.matches("abc")
        assert predicate.matches("ab")
        assert not predicate.matches("a")
        assert not predicate.matches("xab")

    def test_null_never_matches(self):
        assert not Predicate.equality("a", 1).matches(None)
        assert not Predicate.range("a").matches(None)
        assert not Predicate.prefix("a", "").matches(None)

    def test_literals(self):
        assert Predicate.equality("a", 1).literals() == [1]
        assert Predicate.range("a", 1, None).literals() == [1]
        assert Predicate.range("a").literals() == []
        assert Predicate.prefix("a", "x").literals() == ["x"]

    def test_normalized_converts_datetimes(self):
        low = datetime(2024, 1, 1, tzinfo=timezone.utc)
        predicate = Predicate.range("ts", low, None).normalized(FieldType.TIMESTAMP)
        assert predicate.low == low.timestamp()
        assert predicate.high is None
        assert predicate.column == "ts"

    def test_is_hashable(self):
        assert len({Predicate.equality("a", 1), Predicate.equality("a", 1)}) == 1

    def test_str(self):
        assert str(Predicate.equality("email", "a@x.com")) == "email = 'a@x.com'"
        assert str(Predicate.range("ts", 2, 5)) == "ts BETWEEN 2 AND 5"
        assert str(Predicate.range("ts", None, 5)) == "ts BETWEEN -inf AND 5"
        assert str(Predicate.prefix("email", "a")) == "email LIKE 'a%'"
