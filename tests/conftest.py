# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.history import InMemoryHistoryManager
from task_tracker.tasks.task_manager import InMemoryTaskManager


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the factories.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="task-tracker-test",
        log_level="DEBUG",
        console_enabled=False,
        history_limit=10,
        data_dir=tmp_path / "data",
    )


@pytest.fixture()
def manager() -> InMemoryTaskManager:
    return InMemoryTaskManager(history=InMemoryHistoryManager(limit=10))


@pytest.fixture()
def state(settings: SimpleNamespace, manager: InMemoryTaskManager) -> AppState:
    return AppState(settings=settings, manager=manager)
