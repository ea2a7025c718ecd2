from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from ..catalog.table_info import TableMetadata
from ..concurrency import ReadWriteLock
from .heap import RowStore
from .index import IndexStore


@dataclass
class Table:
    """Physical state of one table: its rows, its indexes and its lock."""

    metadata: TableMetadata
    rows: RowStore
    indexes: IndexStore
    lock: ReadWriteLock = field(default_factory=ReadWriteLock)

    @classmethod
    def create(cls, metadata: TableMetadata, lock_timeout: Optional[float] = None,
               log: Callable[..., None] | None = None) -> 'Table':
        return cls(
            metadata=metadata,
            rows=RowStore(metadata),
            indexes=IndexStore(metadata, log=log),
            lock=ReadWriteLock(metadata.table_name, timeout=lock_timeout),
        )

    @property
    def name(self) -> str:
        return self.metadata.table_name
