import time
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Optional

from ..core.exceptions import UnknownColumn
from ..core.types import FieldType


class IndexKind(Enum):
    """Physical structure backing an index."""
    ORDERED = "ordered"
    HASH = "hash"


@dataclass(frozen=True)
class ColumnDef:
    """
    Definition of a single table column.

    🏷️ A column has a name, a scalar type and a nullability flag.
    """

    """🏷️ Column name, unique within the table"""
    name: str

    """🔢 Scalar type of values stored in this column"""
    field_type: FieldType

    """🕳️ Whether the column may hold NULL (None)"""
    nullable: bool = True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "field_type": self.field_type.value,
            "nullable": self.nullable,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ColumnDef':
        return cls(
            name=data["name"],
            field_type=FieldType(data["field_type"]),
            nullable=data.get("nullable", True),
        )


@dataclass
class IndexDef:
    """
    Information about an index on a table.

    🏷️ Represents metadata about a single-column index including its kind
    and uniqueness constraint.
    """

    """🏷️ Unique name identifying this index within its table"""
    index_name: str

    """📋 Name of the table this index belongs to"""
    table_name: str

    """🔑 Name of the column covered by this index"""
    column: str

    """🌳 Kind of index (ordered or hash)"""
    kind: IndexKind = IndexKind.ORDERED

    """⭐ Whether this index enforces uniqueness"""
    unique: bool = False

    """⏰ Unix timestamp when index was created"""
    created_at: float = 0.0

    def __post_init__(self):
        """
        🎬 Initialize index creation timestamp if not provided.
        """
        if self.created_at == 0:
            self.created_at = time.time()

    def to_dict(self) -> dict:
        """
        📦 Convert index info to dictionary format for serialization.

        Returns:
            dict: Dictionary representation of the index
        """
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'IndexDef':
        """
        📥 Create index info from dictionary representation.

        Args:
            data: Dictionary containing index attributes

        Returns:
            IndexDef: New index info instance
        """
        data = dict(data)
        data["kind"] = IndexKind(data["kind"])
        return cls(**data)


@dataclass
class TableMetadata:
    """
    Complete metadata for a table.

    📚 Represents all metadata associated with a table including:
    - Basic properties (name, id)
    - Column definitions in declaration order
    - Indexes in registration order
    - Statistical information
    """

    """📋 Name of the table"""
    table_name: str

    """🆔 Unique numeric identifier for the table"""
    table_id: int

    """📝 Column definitions in declaration order"""
    columns: list[ColumnDef]

    """⏰ Unix timestamp when table was created"""
    created_at: float = 0.0

    """🔄 Unix timestamp of last modification"""
    modified_at: float = 0.0

    """📊 Number of live rows in the table"""
    row_count: int = 0

    """📇 Map of index name to index info, in registration order"""
    indexes: Optional[dict[str, IndexDef]] = None

    """💬 Optional description of the table"""
    table_comment: str = ""

    _columns_by_name: dict[str, ColumnDef] = field(
        default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """
        🎬 Initialize collections and timestamps if not provided.
        """
        if self.indexes is None:
            self.indexes = {}
        if self.created_at == 0:
            self.created_at = time.time()
        if self.modified_at == 0:
            self.modified_at = time.time()
        self._columns_by_name = {c.name: c for c in self.columns}

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def has_column(self, name: str) -> bool:
        return name in self._columns_by_name

    def get_column(self, name: str) -> ColumnDef:
        """
        🔍 Look up a column definition by name.

        Raises:
            UnknownColumn: If the table has no such column
        """
        try:
            return self._columns_by_name[name]
        except KeyError:
            raise UnknownColumn(
                f"Column '{name}' not found in table '{self.table_name}'")

    def add_index(self, index_def: IndexDef) -> None:
        """
        📇 Add an index to this table.

        Args:
            index_def: Index metadata to add
        """
        self.indexes[index_def.index_name] = index_def
        self.modified_at = time.time()

    def remove_index(self, index_name: str) -> bool:
        """
        🗑️ Remove an index from this table.

        Args:
            index_name: Name of index to remove

        Returns:
            bool: True if index was removed, False if not found
        """
        if index_name in self.indexes:
            del self.indexes[index_name]
            self.modified_at = time.time()
            return True
        return False

    def indexes_on(self, column: str) -> list[IndexDef]:
        """
        🔑 Get the indexes covering a column, in registration order.
        """
        return [i for i in self.indexes.values() if i.column == column]

    def update_statistics(self, row_count: int) -> None:
        """
        📊 Update table statistics.

        Args:
            row_count: New number of rows
        """
        self.row_count = row_count
        self.modified_at = time.time()

    def to_dict(self) -> dict:
        """
        📦 Convert to dictionary for JSON serialization.

        Returns:
            dict: Dictionary representation of table metadata
        """
        return {
            "table_name": self.table_name,
            "table_id": self.table_id,
            "columns": [c.to_dict() for c in self.columns],
            "created_at": self.created_at,
            "modified_at": self.modified_at,
            "row_count": self.row_count,
            "table_comment": self.table_comment,
            "indexes": {name: idx.to_dict() for name, idx in self.indexes.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TableMetadata':
        """
        📥 Create from dictionary loaded from JSON.

        Args:
            data: Dictionary containing table metadata

        Returns:
            TableMetadata: New table metadata instance
        """
        columns = [ColumnDef.from_dict(c) for c in data["columns"]]

        indexes = {}
        for name, idx_data in data.get("indexes", {}).items():
            indexes[name] = IndexDef.from_dict(idx_data)

        return cls(
            table_name=data["table_name"],
            table_id=data["table_id"],
            columns=columns,
            created_at=data.get("created_at", 0.0),
            modified_at=data.get("modified_at", 0.0),
            row_count=data.get("row_count", 0),
            indexes=indexes,
            table_comment=data.get("table_comment", ""),
        )
