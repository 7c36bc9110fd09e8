"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from exercise_tracker.config import Settings, get_settings
from exercise_tracker.db import ExerciseRepository, UserRepository, init_db
from exercise_tracker.web import create_app


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def settings(temp_db_path):
    """Settings pointing at the temporary database."""
    return Settings(data_dir=temp_db_path.parent, db_name=temp_db_path.name)


@pytest.fixture
def app(settings):
    """Application bound to the temporary database."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def user_repo(temp_db_path):
    """User repository on an initialized database."""
    await init_db(temp_db_path)
    return UserRepository(temp_db_path)


@pytest_asyncio.fixture
async def exercise_repo(temp_db_path):
    """Exercise repository on an initialized database."""
    await init_db(temp_db_path)
    return ExerciseRepository(temp_db_path)


@pytest.fixture
def cli_env(monkeypatch, temp_db_path):
    """Point the CLI's settings at the temporary database."""
    monkeypatch.setenv("EXERCISE_TRACKER_DATA_DIR", str(temp_db_path.parent))
    monkeypatch.setenv("EXERCISE_TRACKER_DB_NAME", temp_db_path.name)
    get_settings.cache_clear()
    yield temp_db_path
    get_settings.cache_clear()
