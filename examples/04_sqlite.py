"""
Example 04: Seeding SQLite

This example demonstrates seeding a SQLite database. Parent links are read
from the tables' foreign keys and column defaults come back in the handles.
"""

import sqlite3
import tempfile
from pathlib import Path

from row_seed import ConnectionConfig, Orchestrator, RecordCreationError, blueprint


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    conn = sqlite3.connect(db_path)
    conn.execute("""
        CREATE TABLE Account (
            id INTEGER PRIMARY KEY,
            Name TEXT NOT NULL,
            Industry TEXT DEFAULT 'Retail'
        )
    """)
    conn.execute("""
        CREATE TABLE Contact (
            id INTEGER PRIMARY KEY,
            LastName TEXT NOT NULL,
            AccountId INTEGER NOT NULL REFERENCES Account(id)
        )
    """)
    conn.commit()
    conn.close()

    config = ConnectionConfig(driver="sqlite", database=db_path)

    print("=== Seeding SQLite ===\n")

    orchestrator = Orchestrator.from_config(config)
    tree = (
        blueprint("Account", Name="Shop {#}")
        .as_alias("shop{#}")
        .times(2)
        .with_children(blueprint("Contact", LastName="Clerk {a}").times(2))
    )
    orchestrator.add(tree).create()

    shop = orchestrator.get_by_alias("shop1")
    print(f"shop1 row: {dict(shop.fields)}\n")

    print("=== Store Failure ===\n")

    # LastName is NOT NULL, so the contact insert fails after the account exists
    failing = Orchestrator.from_config(config)
    failing.add(
        blueprint("Account", Name="Orphanage")
        .as_alias("orphanage")
        .with_children(blueprint("Contact")),
    )
    try:
        failing.create()
    except RecordCreationError as e:
        print(f"Run failed: {e}")
        print(f"Run state: {failing.state.value}")

    with sqlite3.connect(db_path) as conn:
        accounts = conn.execute("SELECT COUNT(*) FROM Account").fetchone()[0]
        contacts = conn.execute("SELECT COUNT(*) FROM Contact").fetchone()[0]
    print(f"Rows left in place: {accounts} accounts, {contacts} contacts")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()
