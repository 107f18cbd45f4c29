# tasks/history.py

from __future__ import annotations

import logging
from collections import OrderedDict

from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


class InMemoryHistoryManager:
    """
    Bounded view-history of accessed items.

    Keyed by id, so a repeat access moves the item to the most-recent
    position instead of adding a duplicate. Oldest entries are evicted
    once `limit` is exceeded.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be >= 1, got {limit}")
        self._limit = int(limit)
        self._items: OrderedDict[int, Task] = OrderedDict()

    @property
    def limit(self) -> int:
        return self._limit

    def add(self, item: Task | None) -> None:
        if item is None or item.id is None:
            return
        self._items.pop(item.id, None)
        self._items[item.id] = item.copy()
        while len(self._items) > self._limit:
            evicted_id, _ = self._items.popitem(last=False)
            logger.debug("History full (limit=%s), evicted id=%s", self._limit, evicted_id)

    def refresh(self, item: Task) -> None:
        """Replace a recorded entry in place (keeps its position)."""
        if item.id is not None and item.id in self._items:
            self._items[item.id] = item.copy()

    def remove(self, item_id: int) -> None:
        self._items.pop(item_id, None)

    def clear(self) -> None:
        self._items.clear()

    def get_history(self) -> list[Task]:
        return [t.copy() for t in self._items.values()]

    def __len__(self) -> int:
        return len(self._items)
