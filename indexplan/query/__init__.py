from .executor import Executor
from .explain import explain_table, print_explain
from .iterator import ExecutionStats
from .planner import AccessPath, AccessPathKind, Planner

__all__ = [
    "Executor",
    "ExecutionStats",
    "AccessPath",
    "AccessPathKind",
    "Planner",
    "explain_table",
    "print_explain",
]
