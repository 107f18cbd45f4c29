# tasks/id_allocator.py

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class IdAllocator:
    """
    Id source shared by tasks, epics and subtasks.

    - next() hands out 1, 2, 3, ... skipping every id seen so far
    - reserve() records a caller-supplied id so next() never returns it
    - seen ids are never released, so deleted ids are not reused
    """

    def __init__(self, start: int = 1) -> None:
        self._counter = start
        self._seen: set[int] = set()

    def next(self) -> int:
        while self._counter in self._seen:
            self._counter += 1
        new_id = self._counter
        self._seen.add(new_id)
        self._counter += 1
        return new_id

    def reserve(self, explicit_id: int) -> None:
        if explicit_id >= self._counter:
            logger.debug("Reserved id=%s ahead of counter=%s", explicit_id, self._counter)
        self._seen.add(int(explicit_id))

    def is_taken(self, some_id: int) -> bool:
        return some_id in self._seen
