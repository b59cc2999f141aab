"""API-specific test fixtures."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def api_client(test_settings):
    """FastAPI test client backed by a fresh SQLite database.

    The real lifespan runs inside the TestClient's event loop, so the
    pool is created and the schema bootstrapped (four default stages)
    exactly as on a production start.
    """
    from app.main import create_app

    with TestClient(create_app()) as client:
        yield client


@pytest.fixture
def make_milestone(api_client):
    """Create a milestone through the API and return its id."""

    def _make(**overrides) -> int:
        payload = {
            "item": 1,
            "stage_id": 1,
            "start_date": "2024-03-01",
            "location": "Site A",
            "completion_date": None,
            "comments": "kick-off",
            "illustration": None,
        }
        payload.update(overrides)
        response = api_client.post("/api/milestones", json=payload)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _make
