"""
Demo entry point: builds two small tables and prints the plans chosen
for a handful of predicates.

Run with: indexplan-demo  (or python -m indexplan.main)
"""
from typing import Optional

from rich.console import Console
from rich.rule import Rule

from .catalog import IndexKind
from .core.types import FieldType, Predicate
from .database import Database
from .query import print_explain


def build_demo_database() -> Database:
    """Create the users and events tables used by the demo."""
    db = Database()

    db.define_table("users", [("id", FieldType.INT, False), ("email", FieldType.TEXT)])
    db.define_index("users", "users_email_idx", "email", IndexKind.HASH, unique=True)
    db.insert_row("users", {"id": 1, "email": "a@x.com"})
    db.insert_row("users", {"id": 2, "email": "b@x.com"})

    db.define_table("events", [("id", FieldType.INT, False), ("ts", FieldType.TIMESTAMP)])
    db.define_index("events", "events_ts_idx", "ts", IndexKind.ORDERED)
    for event_id, ts in enumerate([5, 1, 3], start=1):
        db.insert_row("events", {"id": event_id, "ts": ts})

    return db


DEMO_QUERIES = [
    ("users", Predicate.equality("email", "a@x.com")),
    ("users", Predicate.prefix("email", "b@")),
    ("users", Predicate.equality("id", 2)),
    ("events", Predicate.range("ts", 2, 5)),
]


def main(console: Optional[Console] = None) -> int:
    """Main entry point of the application."""
    console = console or Console()
    db = build_demo_database()

    for table_name, predicate in DEMO_QUERIES:
        console.print(Rule(f"{table_name}: {predicate}"))
        path, stats = db.explain_analyze(table_name, predicate)
        print_explain(path, stats, console=console)
        for row in db.query(table_name, predicate):
            console.print(f"  row {row.row_id}: {row.to_dict()}", highlight=False)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
