"""Shared test fixtures."""

from __future__ import annotations

import pytest

from row_seed.core.connection import ConnectionConfig
from row_seed.core.orchestrator import Orchestrator
from row_seed.store.memory import ConventionEntitySchema, InMemoryRecordStore


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:", pool_size=1)


@pytest.fixture
def schema() -> ConventionEntitySchema:
    """Convention schema for a small CRM-like model."""
    return ConventionEntitySchema(
        {
            "Account": ["Name", "Industry"],
            "Contact": ["LastName", "Email", "AccountId"],
            "Opportunity": ["Name", "StageName", "AccountId"],
            "OpportunityLineItem": ["Quantity", "OpportunityId", "PricebookEntryId"],
            "Case": ["Subject", "ContactId"],
        }
    )


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def orchestrator(store: InMemoryRecordStore, schema: ConventionEntitySchema) -> Orchestrator:
    return Orchestrator(store, schema)
