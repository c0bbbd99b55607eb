"""Shared test fixtures."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from teamhealth.api.server import create_app
from teamhealth.records.service import RecordService
from teamhealth.records.store import SQLiteRecordStore


@pytest.fixture
def store(tmp_path) -> SQLiteRecordStore:
    """SQLiteRecordStore backed by a temp file."""
    return SQLiteRecordStore(db_path=tmp_path / "test_team_health.db")


@pytest.fixture
def service(store) -> RecordService:
    return RecordService(store)


@pytest.fixture
def client(service) -> TestClient:
    """API client wired to a temp store, matching what the lifespan builds."""
    app = create_app()
    app.state.record_service = service
    return TestClient(app)


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {"name": "Ana", "feeling": "Good", "date": "2024-06-01T09:30"}
