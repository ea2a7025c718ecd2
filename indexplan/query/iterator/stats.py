from dataclasses import dataclass


@dataclass
class ExecutionStats:
    """Counters collected while an access path runs (EXPLAIN ANALYZE)."""

    """📄 Rows fetched from row storage and tested"""
    rows_examined: int = 0

    """✅ Rows that satisfied the predicate"""
    rows_returned: int = 0

    """🔑 Index entries read by lookups and scans"""
    index_entries_read: int = 0

    def reset(self) -> None:
        self.rows_examined = 0
        self.rows_returned = 0
        self.index_entries_read = 0
