"""
Rule-based access path selection.

The planner answers one question: given a single-column predicate and
the indexes the catalog knows about, which structure should be used to
find the matching rows? The policy is fixed and deterministic:

1. Equality with any index on the column -> index lookup, preferring a
   hash index over an ordered one.
2. Range or prefix with an ordered index on the column -> ordered
   range scan.
3. Anything else -> sequential scan.

Among several eligible indexes of the preferred kind, the one
registered first wins.

This is a policy, not a cost model. No statistics or selectivity
estimates are consulted, so the choice can differ from what a real
database planner would pick for the same query.
"""
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cachetools import LRUCache

from ..catalog import Catalog
from ..catalog.table_info import IndexDef, IndexKind
from ..core.types import Predicate, PredicateKind


class AccessPathKind(Enum):
    """Strategies the executor knows how to run."""
    SEQ_SCAN = "Seq Scan"
    INDEX_LOOKUP = "Index Lookup"
    INDEX_RANGE_SCAN = "Index Range Scan"


@dataclass(frozen=True)
class AccessPath:
    """The chosen strategy for evaluating one predicate against one table."""

    kind: AccessPathKind
    table: str
    predicate: Predicate
    index: Optional[IndexDef] = None

    @property
    def uses_index(self) -> bool:
        return self.index is not None

    @property
    def ordered(self) -> bool:
        """Whether rows come back in ascending key order."""
        return self.kind is AccessPathKind.INDEX_RANGE_SCAN

    def describe(self) -> str:
        """One-line EXPLAIN-style description."""
        if self.index is None:
            return f"{self.kind.value} on {self.table}  (Filter: {self.predicate})"

        label = self.kind.value
        if self.kind is AccessPathKind.INDEX_LOOKUP:
            label = f"{self.index.kind.value.capitalize()} {label}"
        return (f"{label} using {self.index.index_name} on {self.table}  "
                f"(Index Cond: {self.predicate})")

    def __str__(self) -> str:
        return self.describe()


class Planner:
    """
    Chooses an AccessPath for a predicate from catalog index metadata.

    Decisions depend only on (table, column, predicate kind) and the
    catalog contents, so they are cached in an LRU cache keyed by those
    plus the catalog version. Any DDL change bumps the version, which
    makes older entries unreachable.
    """

    def __init__(self, catalog: Catalog, cache_size: int = 128):
        self.catalog = catalog
        self._cache: Optional[LRUCache] = LRUCache(maxsize=cache_size) if cache_size else None
        self._cache_lock = threading.Lock()
        self.cache_hits = 0
        self.cache_misses = 0

    def plan(self, table_name: str, predicate: Predicate) -> AccessPath:
        """
        Pick the access path for predicate on table_name.

        Raises:
            UnknownTable: If the table does not exist
            UnknownColumn: If the predicate column is not in the table
        """
        metadata = self.catalog.get_table_metadata(table_name)
        metadata.get_column(predicate.column)

        key = (table_name, predicate.column, predicate.kind, self.catalog.version)
        decision = self._cached(key)
        if decision is None:
            decision = self._choose(metadata.indexes_on(predicate.column), predicate.kind)
            self._remember(key, decision)

        kind, index = decision
        return AccessPath(kind=kind, table=table_name, predicate=predicate, index=index)

    @staticmethod
    def _choose(indexes: list[IndexDef],
                predicate_kind: PredicateKind) -> tuple[AccessPathKind, Optional[IndexDef]]:
        ordered = [i for i in indexes if i.kind is IndexKind.ORDERED]

        if predicate_kind is PredicateKind.EQUALITY and indexes:
            hashed = [i for i in indexes if i.kind is IndexKind.HASH]
            return AccessPathKind.INDEX_LOOKUP, (hashed or ordered)[0]

        if predicate_kind in (PredicateKind.RANGE, PredicateKind.PREFIX) and ordered:
            return AccessPathKind.INDEX_RANGE_SCAN, ordered[0]

        return AccessPathKind.SEQ_SCAN, None

    def _cached(self, key):
        if self._cache is None:
            self.cache_misses += 1
            return None
        with self._cache_lock:
            decision = self._cache.get(key)
            if decision is None:
                self.cache_misses += 1
            else:
                self.cache_hits += 1
            return decision

    def _remember(self, key, decision) -> None:
        if self._cache is None:
            return
        with self._cache_lock:
            self._cache[key] = decision
