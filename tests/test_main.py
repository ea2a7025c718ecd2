"""
Tests for the demo entry point.
"""

import io

from rich.console import Console

from indexplan.main import DEMO_QUERIES, build_demo_database, main


def test_main_prints_plans():
    out = io.StringIO()
    assert main(Console(file=out, width=120)) == 0

    text = out.getvalue()
    assert "Hash Index Lookup using users_email_idx on users" in text
    assert "Index Range Scan using events_ts_idx on events" in text
    assert "Seq Scan on users" in text


def test_demo_database():
    db = build_demo_database()
    assert db.catalog.list_tables() == ["users", "events"]
    for table_name, predicate in DEMO_QUERIES:
        db.query(table_name, predicate)
