# tasks/managers.py

"""Default-instance factories for the task manager and its history."""

from __future__ import annotations

from ..config import get_settings
from ..core.ports import HistoryManager, TaskManager
from .history import InMemoryHistoryManager
from .task_manager import InMemoryTaskManager


def get_default_history(settings=None) -> HistoryManager:
    if settings is None:
        settings = get_settings()
    return InMemoryHistoryManager(limit=settings.history_limit)


def get_default(settings=None) -> TaskManager:
    """Fresh in-memory manager wired with the configured history."""
    return InMemoryTaskManager(history=get_default_history(settings))
