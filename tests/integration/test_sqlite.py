"""Integration tests against SQLite.

These tests use SQLite (stdlib) and run without any external database.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from row_seed.blueprint.model import blueprint
from row_seed.core.config import RunConfig
from row_seed.core.connection import ConnectionConfig, ConnectionManager
from row_seed.core.enums import RunState
from row_seed.core.exceptions import (
    IdentifierError,
    ParentFieldInferenceError,
    RecordCreationError,
    RecordStoreError,
)
from row_seed.core.orchestrator import Orchestrator
from row_seed.store.sql import SqlEntitySchema, SqlRecordStore

_DDL = [
    """CREATE TABLE Account (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        Name TEXT NOT NULL,
        Industry TEXT DEFAULT 'Retail'
    )""",
    """CREATE TABLE Contact (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        LastName TEXT,
        Note TEXT,
        AccountId INTEGER NOT NULL REFERENCES Account(id)
    )""",
    """CREATE TABLE Case_ (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        Subject TEXT NOT NULL,
        ContactId INTEGER REFERENCES Contact(id)
    )""",
    """CREATE TABLE Transfer (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        FromAccountId INTEGER REFERENCES Account(id),
        ToAccountId INTEGER REFERENCES Account(id)
    )""",
    """CREATE TABLE Product (
        code TEXT PRIMARY KEY,
        Name TEXT,
        Category TEXT DEFAULT 'General'
    )""",
    """CREATE TABLE Review (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        Body TEXT,
        ProductCode TEXT NOT NULL REFERENCES Product(code)
    )""",
]


def _create_tables(manager: ConnectionManager) -> None:
    with manager.get_connection() as conn:
        for statement in _DDL:
            conn.execute(statement)
        conn.commit()


@pytest.fixture
def manager(sqlite_config: ConnectionConfig) -> Iterator[ConnectionManager]:
    manager = ConnectionManager(sqlite_config)
    _create_tables(manager)
    yield manager
    manager.close_pool()


@pytest.fixture
def sql_orchestrator(manager: ConnectionManager) -> Orchestrator:
    return Orchestrator(
        SqlRecordStore(manager),
        SqlEntitySchema(manager),
        RunConfig(id_field="Id"),
    )


def _count(manager: ConnectionManager, table: str) -> int:
    with manager.get_connection() as conn:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


@pytest.mark.integration
class TestSqlRecordStore:
    def test_insert_reads_back_defaults(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager)
        handle = store.create("Account", {"Name": "Acme"})
        assert handle.entity_type == "Account"
        assert handle.id == 1
        assert handle["Name"] == "Acme"
        assert handle["Industry"] == "Retail"
        assert handle["id"] == 1

    def test_text_primary_key_is_the_handle_id(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager, id_column="code")
        handle = store.create("Product", {"code": "P-1", "Name": "Widget"})
        assert handle.id == "P-1"
        assert handle["code"] == "P-1"
        assert handle["Category"] == "General"

    def test_rowid_locates_row_after_earlier_inserts(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager, id_column="code")
        store.create("Product", {"code": "P-1", "Name": "First"})
        handle = store.create("Product", {"code": "P-2", "Name": "Second"})
        assert handle.id == "P-2"
        assert handle["Name"] == "Second"

    def test_constraint_violation_raises(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager)
        with pytest.raises(RecordStoreError, match="Account"):
            store.create("Account", {"Industry": "Energy"})
        assert _count(manager, "Account") == 0

    def test_rejects_unsafe_table_name(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager)
        with pytest.raises(IdentifierError):
            store.create("Account; DROP TABLE Account", {"Name": "x"})

    def test_rejects_unsafe_column_name(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager)
        with pytest.raises(IdentifierError):
            store.create("Account", {"Name--": "x"})


@pytest.mark.integration
class TestSqlEntitySchema:
    def test_infers_foreign_key_column(self, manager: ConnectionManager) -> None:
        schema = SqlEntitySchema(manager)
        assert schema.infer_parent_field("Contact", "Account") == "AccountId"
        assert schema.infer_parent_field("Contact", "account") == "AccountId"

    def test_no_foreign_key(self, manager: ConnectionManager) -> None:
        schema = SqlEntitySchema(manager)
        assert schema.infer_parent_field("Account", "Contact") is None

    def test_ambiguous_foreign_keys(self, manager: ConnectionManager) -> None:
        schema = SqlEntitySchema(manager)
        with pytest.raises(ParentFieldInferenceError, match="ambiguous"):
            schema.infer_parent_field("Transfer", "Account")


@pytest.mark.integration
class TestSqliteRun:
    def test_tree_with_bulk_children(
        self, sql_orchestrator: Orchestrator, manager: ConnectionManager
    ) -> None:
        tree = (
            blueprint("Account", Name="Account {#}")
            .as_alias("acc{#}")
            .times(2)
            .with_children(
                blueprint("Contact", LastName="Person {A}")
                .as_alias("{P0}-con{#}")
                .times(2)
                .use_ref("{P0}", "Industry", "Note")
            )
        )
        registry = sql_orchestrator.add(tree).create()

        assert _count(manager, "Account") == 2
        assert _count(manager, "Contact") == 4
        acc2 = registry.resolve("acc2")
        con = registry.resolve("acc2-con2")
        assert con["AccountId"] == acc2.id
        assert con["LastName"] == "Person B"
        assert con["Note"] == "Retail"

    def test_id_field_maps_to_primary_key(self, sql_orchestrator: Orchestrator) -> None:
        sql_orchestrator.add(
            blueprint("Account", Name="Acme").as_alias("acc"),
            blueprint("Transfer")
            .as_alias("tx")
            .use_ref("acc", "Id", "FromAccountId")
            .use_ref("acc", "id", "ToAccountId"),
        ).create()
        acc = sql_orchestrator.get_by_alias("acc")
        tx = sql_orchestrator.get_by_alias("tx")
        assert tx["FromAccountId"] == acc.id
        assert tx["ToAccountId"] == acc.id

    def test_failure_keeps_earlier_rows(
        self, sql_orchestrator: Orchestrator, manager: ConnectionManager
    ) -> None:
        sql_orchestrator.add(
            blueprint("Account", Name="Kept").as_alias("acc"),
            blueprint("Case_").as_alias("case"),
        )
        with pytest.raises(RecordCreationError, match="'case'") as exc_info:
            sql_orchestrator.create()

        assert isinstance(exc_info.value.__cause__, RecordStoreError)
        assert sql_orchestrator.state == RunState.FAILED
        assert _count(manager, "Account") == 1
        assert _count(manager, "Case_") == 0

    def test_unsafe_entity_type_fails_the_run(self, sql_orchestrator: Orchestrator) -> None:
        sql_orchestrator.add(blueprint("Bad Table", Name="x"))
        with pytest.raises(RecordCreationError) as exc_info:
            sql_orchestrator.create()
        assert isinstance(exc_info.value.__cause__, IdentifierError)

    def test_children_link_to_text_key(self, manager: ConnectionManager) -> None:
        store = SqlRecordStore(manager, id_column="code")
        orchestrator = Orchestrator(store, SqlEntitySchema(manager))
        tree = (
            blueprint("Product", code="SKU-{#}", Name="Item {A}")
            .as_alias("sku{#}")
            .times(2)
            .with_children(blueprint("Review", Body="Good").as_alias("{P0}-review"))
        )
        registry = orchestrator.add(tree).create()

        assert registry.resolve("sku2").id == "SKU-2"
        assert registry.resolve("sku2-review")["ProductCode"] == "SKU-2"
        with manager.get_connection() as conn:
            rows = conn.execute("SELECT ProductCode FROM Review ORDER BY id").fetchall()
        assert [row[0] for row in rows] == ["SKU-1", "SKU-2"]


@pytest.mark.integration
class TestFromConfig:
    def test_file_database(self, tmp_path: Path) -> None:
        config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "seed.db"), pool_size=2)
        setup = ConnectionManager(config)
        _create_tables(setup)
        setup.close_pool()

        orchestrator = Orchestrator.from_config(config)
        tree = (
            blueprint("Account", Name="Acme")
            .as_alias("acc")
            .with_children(blueprint("Contact", LastName="Doe").as_alias("con"))
        )
        orchestrator.add(tree).create()

        assert orchestrator.get_by_alias("con")["AccountId"] == (
            orchestrator.get_by_alias("acc").id
        )
