"""
Shared fixtures: a fixed clock, an in-memory document store and installation factories.
"""
from datetime import datetime, timezone
from typing import Any

import pytest

from solarview.installations.repository import InstallationRepository
from solarview.installations.schemas import Installation
from solarview.storage.store import InMemoryDocumentStore
from solarview.workflow.engine import WorkflowEngine

# 14:30 in Brasília
NOW = datetime(2025, 3, 5, 17, 30, tzinfo=timezone.utc)


def make_installation(**overrides: Any) -> Installation:
    data = {
        "id": 1,
        "installation_id": "INST-001",
        "client_id": 2,
        "client_name": "Maria Silva",
        "address": "Rua B, 456",
        "city": "São Paulo",
        "state": "SP",
        "zip_code": "01000-002",
        "installation_type": "residencial",
        "utility_company": "Enel",
    }
    data.update(overrides)
    return Installation(**data)


@pytest.fixture
def engine() -> WorkflowEngine:
    return WorkflowEngine(clock=lambda: NOW, auto_schedule_days=7)


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repository(store: InMemoryDocumentStore) -> InstallationRepository:
    return InstallationRepository(store)
