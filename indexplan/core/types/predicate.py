from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .type_enum import FieldType


class PredicateKind(Enum):
    """Predicate operations over a single column."""
    EQUALITY = "="
    RANGE = "BETWEEN"
    PREFIX = "LIKE"


@dataclass(frozen=True)
class Predicate:
    """
    A single-column filter: equality, inclusive range or prefix match.

    Build instances with the ``equality``, ``range`` and ``prefix``
    constructors rather than directly. For ranges, a ``None`` bound means
    the range is open on that side.
    """

    kind: PredicateKind
    column: str
    value: Any = None
    low: Any = None
    high: Any = None

    @classmethod
    def equality(cls, column: str, value: Any) -> 'Predicate':
        return cls(PredicateKind.EQUALITY, column, value=value)

    @classmethod
    def range(cls, column: str, low: Any = None, high: Any = None) -> 'Predicate':
        return cls(PredicateKind.RANGE, column, low=low, high=high)

    @classmethod
    def prefix(cls, column: str, prefix: str) -> 'Predicate':
        return cls(PredicateKind.PREFIX, column, value=prefix)

    def literals(self) -> list:
        """Return the literal values carried by this predicate (open bounds excluded)."""
        if self.kind is PredicateKind.RANGE:
            return [v for v in (self.low, self.high) if v is not None]
        return [self.value]

    def normalized(self, field_type: 'FieldType') -> 'Predicate':
        """Return a copy whose literals are converted to index keys."""
        def key(v):
            return None if v is None else field_type.to_key(v)

        return replace(self, value=key(self.value),
                       low=key(self.low), high=key(self.high))

    def matches(self, key: Any) -> bool:
        """Evaluate against a normalized key. NULL keys never match."""
        if key is None:
            return False

        if self.kind is PredicateKind.EQUALITY:
            return key == self.value

        if self.kind is PredicateKind.PREFIX:
            return isinstance(key, str) and key.startswith(self.value)

        if self.low is not None and key < self.low:
            return False
        if self.high is not None and key > self.high:
            return False
        return True

    def __str__(self) -> str:
        if self.kind is PredicateKind.EQUALITY:
            return f"{self.column} = {self.value!r}"
        if self.kind is PredicateKind.PREFIX:
            return f"{self.column} LIKE {(self.value + '%')!r}"
        low = "-inf" if self.low is None else repr(self.low)
        high = "+inf" if self.high is None else repr(self.high)
        return f"{self.column} BETWEEN {low} AND {high}"
