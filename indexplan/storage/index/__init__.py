"""
In-memory secondary indexes.

Each table owns an IndexStore holding one physical structure per
IndexDef registered in the catalog:

- OrderedIndex: sorted (key, RowId) entries; equality, range and prefix
- HashIndex: key -> RowId buckets; equality only

NULL column values are never indexed. A unique index therefore accepts
any number of rows whose key is NULL.
"""
from .index import Index
from .hash_index import HashIndex
from .ordered_index import OrderedIndex, IndexRangeScan, IndexPrefixScan
from .index_store import IndexStore

__all__ = [
    "Index",
    "HashIndex",
    "OrderedIndex",
    "IndexRangeScan",
    "IndexPrefixScan",
    "IndexStore",
]
