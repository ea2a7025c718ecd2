from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table as RichTable

from .iterator import ExecutionStats
from .planner import AccessPath


def explain_table(path: AccessPath, stats: Optional[ExecutionStats] = None) -> RichTable:
    """Render an access path (and optional run counters) as a rich table."""
    table = RichTable(title="QUERY PLAN", box=box.SIMPLE_HEAVY, title_justify="left")
    table.add_column("Property", style="bold cyan")
    table.add_column("Value")

    table.add_row("Access path", path.kind.value)
    table.add_row("Table", path.table)
    table.add_row("Predicate", escape(str(path.predicate)))
    if path.index is not None:
        unique = " unique" if path.index.unique else ""
        table.add_row("Index", f"{path.index.index_name} "
                               f"({path.index.kind.value}{unique} on {path.index.column})")
    table.add_row("Output order", "ascending key" if path.ordered else "unspecified")

    if stats is not None:
        table.add_row("Rows examined", str(stats.rows_examined))
        table.add_row("Rows returned", str(stats.rows_returned))
        table.add_row("Index entries read", str(stats.index_entries_read))

    return table


def print_explain(path: AccessPath, stats: Optional[ExecutionStats] = None,
                  console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(escape(path.describe()), style="bold", highlight=False)
    console.print(explain_table(path, stats))
