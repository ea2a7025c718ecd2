from .heap import RowStore
from .index import IndexStore
from .table import Table

__all__ = ["RowStore", "IndexStore", "Table"]
