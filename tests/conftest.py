"""Shared test fixtures and configuration.

Every test runs against a ConfigService rooted in ``tmp_path`` so nothing
touches the real config directory or vault.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from unittest.mock import patch

import pytest

from habitpro_cli.adapters.memory import (
    MemoryAchievementRepository,
    MemoryCompletionRepository,
    MemoryStore,
    MemoryTaskRepository,
)
from habitpro_cli.adapters.sqlite import schema as db_schema
from habitpro_cli.models import Task


def make_task(task_id: str = "task-0001", **overrides) -> Task:
    """Build a Task with sensible defaults for recurrence tests."""
    fields = {
        "id": task_id,
        "title": "Morning run",
        "time": "07:00",
        "frequency": "daily",
        "created_at": datetime(2024, 1, 1, 8, 0, 0),
    }
    fields.update(overrides)
    return Task(**fields)


def create_in_memory_db() -> sqlite3.Connection:
    """Create an in-memory SQLite database with the full schema applied."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    db_schema.initialize_schema(conn)
    return conn


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def tmp_config(tmp_path, monkeypatch, tmp_log_dir):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only, and
    clears the lru_caches so each test gets fresh service and strategy
    instances.
    """
    from habitpro_cli.services.config_service import ConfigService, get_config_service
    from habitpro_cli.services.context_manager import get_strategy_context

    monkeypatch.delenv("HABITPRO_DB_PATH", raising=False)
    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    get_strategy_context.cache_clear()
    with patch("habitpro_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("habitpro_cli.services.config_service.user_data_dir", return_value=tmpdir):
            yield ConfigService()
    get_config_service.cache_clear()
    get_strategy_context.cache_clear()


@pytest.fixture(autouse=True)
def tmp_log_dir(tmp_path, monkeypatch):
    """Send the application log to *tmp_path*/logs.

    The logger is reconfigured per test and its file handler closed on
    teardown, so no test writes to the real user log directory.
    """
    from habitpro_cli.utils import logger as app_logger

    log_dir = tmp_path / "logs"
    monkeypatch.delenv("HABITPRO_LOG_LEVEL", raising=False)
    monkeypatch.setattr(app_logger, "user_log_dir", lambda _name: str(log_dir))
    monkeypatch.setattr(app_logger, "_configured", False)
    yield log_dir
    logger = logging.getLogger(app_logger.LOGGER_NAME)
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture()
def memory_storage(tmp_config):
    """Switch the CLI to the in-memory backend for the duration of a test.

    The strategy context is cached, so every command invocation in the test
    shares one MemoryStore.
    """
    from habitpro_cli.services.config_service import get_config_service
    from habitpro_cli.services.context_manager import get_strategy_context

    get_config_service().set("storage.type", "memory")
    get_strategy_context.cache_clear()
    return get_strategy_context()


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


@pytest.fixture()
def store():
    return MemoryStore()


@pytest.fixture()
def task_repo(store):
    return MemoryTaskRepository(store)


@pytest.fixture()
def completion_repo(store):
    return MemoryCompletionRepository(store)


@pytest.fixture()
def achievement_repo(store):
    return MemoryAchievementRepository(store)


@pytest.fixture()
def task_factory():
    return make_task


@pytest.fixture()
def sqlite_conn():
    """Fresh in-memory database with the schema applied."""
    conn = create_in_memory_db()
    yield conn
    conn.close()
