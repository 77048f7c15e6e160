"""Pytest fixtures for Avalon tracker tests."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio
import structlog

# Add the parent directory to the path if not already there
# so that the avalon_tracker and tests packages import in CI
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from avalon_tracker.config import Config
from avalon_tracker.adapters.database.manager import DatabaseManager
from tests.factories import GameRecordFactory, SAMPLE_SHEET


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def test_config(monkeypatch, tmp_path):
    """Create test configuration backed by a temporary SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'avalon_test.db'}")
    monkeypatch.setenv("ENVIRONMENT", "CI")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.setenv("LOG_FORMAT", "text")

    return Config.from_env()


@pytest_asyncio.fixture
async def db_manager(test_config):
    """Initialized database manager with all tables created."""
    manager = DatabaseManager(test_config)
    await manager.initialize()
    await manager.create_tables()

    yield manager

    await manager.close()


@pytest.fixture
def sample_game():
    """Five player game won by evil through assassination."""
    return GameRecordFactory.five_player_game()


@pytest.fixture
def sample_sheet_path(tmp_path):
    """Game sheet on disk holding the two sample games."""
    path = tmp_path / "games.yaml"
    path.write_text(SAMPLE_SHEET, encoding="utf-8")
    return path
