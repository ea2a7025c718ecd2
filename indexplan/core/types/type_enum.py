import math
from datetime import datetime
from enum import Enum
from typing import Any


class FieldType(Enum):
    """
    Enum for column types.
    """
    INT = "int"
    TEXT = "text"
    TIMESTAMP = "timestamp"

    def accepts(self, value: Any) -> bool:
        """Check whether a non-null Python value belongs to this type."""
        if self is FieldType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is FieldType.TEXT:
            return isinstance(value, str)
        if isinstance(value, datetime):
            return True
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        # NaN and infinities have no place in key order
        return isinstance(value, int) or math.isfinite(value)

    def to_key(self, value: Any) -> Any:
        """
        Normalize a value into its index key.

        Timestamps may be given as epoch seconds or as datetime objects;
        both map to epoch seconds so they sort together.
        """
        if self is FieldType.TIMESTAMP and isinstance(value, datetime):
            return value.timestamp()
        return value

    @classmethod
    def parse(cls, name: str) -> 'FieldType':
        """Look up a type by its value, e.g. ``"int"``."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown type: {name}")
