from typing import Optional

from ..core.exceptions import ColumnTypeMismatch
from ..core.iterator import AbstractDbIterator
from ..core.row import Row
from ..core.types import FieldType, Predicate, PredicateKind
from ..catalog.table_info import ColumnDef
from ..storage import Table
from .iterator import ExecutionStats, IndexLookupScan, IndexScan, SeqScan
from .planner import AccessPath, AccessPathKind


class Executor:
    """
    Runs an AccessPath against a table's row and index storage.

    Output order:
    - INDEX_RANGE_SCAN: ascending key order
    - SEQ_SCAN and INDEX_LOOKUP: unspecified (row id order in practice)
    """

    def execute(self, path: AccessPath, table: Table,
                stats: Optional[ExecutionStats] = None) -> AbstractDbIterator[Row]:
        """
        Build the lazy operator for path.

        Raises:
            ColumnTypeMismatch: If a predicate literal does not match the column type
        """
        column = table.metadata.get_column(path.predicate.column)
        self.check_predicate(path.predicate, column)
        predicate = path.predicate.normalized(column.field_type)

        if path.kind is AccessPathKind.SEQ_SCAN:
            return SeqScan(table.rows, predicate, column.field_type, stats)

        index_name = path.index.index_name

        if path.kind is AccessPathKind.INDEX_LOOKUP:
            return IndexLookupScan(table.rows, table.indexes, index_name,
                                   predicate.value, stats)

        if predicate.kind is PredicateKind.PREFIX:
            row_ids = table.indexes.prefix_scan(index_name, predicate.value)
        elif predicate.kind is PredicateKind.RANGE:
            row_ids = table.indexes.range_scan(index_name, predicate.low, predicate.high)
        else:
            row_ids = table.indexes.range_scan(index_name, predicate.value, predicate.value)
        return IndexScan(table.rows, row_ids, stats)

    @staticmethod
    def check_predicate(predicate: Predicate, column: ColumnDef) -> None:
        """Verify every literal of predicate fits the column type."""
        if predicate.kind is PredicateKind.PREFIX:
            if column.field_type is not FieldType.TEXT:
                raise ColumnTypeMismatch(
                    f"Prefix match needs a text column, '{column.name}' is "
                    f"{column.field_type.value}")
            if not isinstance(predicate.value, str):
                raise ColumnTypeMismatch(
                    f"Prefix for '{column.name}' must be text, got {predicate.value!r}")
            return

        for literal in predicate.literals():
            if literal is None:
                continue
            if not column.field_type.accepts(literal):
                raise ColumnTypeMismatch(
                    f"Column '{column.name}' is {column.field_type.value}, "
                    f"literal {literal!r} is {type(literal).__name__}")
