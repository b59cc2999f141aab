"""Shared test fixtures for all test groups."""

import pytest

from app.core.config import get_settings


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    """File-backed SQLite URL (aiosqlite) unique to the test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'milestones.db'}"


@pytest.fixture
def test_settings(tmp_path, sqlite_url, monkeypatch):
    """Settings pointing at a throwaway database and upload directory."""
    monkeypatch.setenv("DATABASE_URL", sqlite_url)
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
