from .seq_scan import SeqScan
from .index_scan import IndexLookupScan, IndexScan
from .stats import ExecutionStats

__all__ = ["SeqScan", "IndexLookupScan", "IndexScan", "ExecutionStats"]
