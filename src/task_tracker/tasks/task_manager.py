# tasks/task_manager.py

from __future__ import annotations

import logging
import threading

from ..core.ports import HistoryManager
from .history import InMemoryHistoryManager
from .id_allocator import IdAllocator
from .task_models import Epic, Subtask, Task, calculate_epic_status

logger = logging.getLogger(__name__)

# Returned by add_* when the item is rejected.
REJECTED = -1


def _require_kind(item: object, kind: type[Task]) -> None:
    if type(item) is not kind:
        raise TypeError(f"expected {kind.__name__}, got {type(item).__name__}")


class InMemoryTaskManager:
    """
    In-memory store for tasks, epics and subtasks.

    Rules:
    - one id space for all three kinds (IdAllocator)
    - an epic's subtask_ids is the source of truth for membership;
      Subtask.epic_id is only a back-reference kept consistent with it
    - epic status is recomputed eagerly after every subtask change
    - get_* by id records the item in history; get_all_* does not
    - get_* / get_all_* / history return copies, never stored objects
    - tasks and subtasks are stored as copies; an added Epic is kept as the
      caller's instance so it reflects its derived status and subtask_ids
    - explicit ids must be >= 1 and never seen before (live or deleted)

    Thread-safety:
    - one coarse RLock guards every public method
    """

    def __init__(self, history: HistoryManager | None = None) -> None:
        self._tasks: dict[int, Task] = {}
        self._epics: dict[int, Epic] = {}
        self._subtasks: dict[int, Subtask] = {}
        self._ids = IdAllocator()
        self._history: HistoryManager = history if history is not None else InMemoryHistoryManager()
        self._lock = threading.RLock()

    # ---- internal helpers ----

    def _assign_id(self, item: Task) -> int:
        if item.id is None:
            return self._ids.next()
        if item.id < 1:
            logger.warning("Rejected %s: invalid id=%s", type(item).__name__, item.id)
            return REJECTED
        # Covers live items and deleted ones: ids are never handed out twice.
        if self._ids.is_taken(item.id):
            logger.warning(
                "Rejected %s: id=%s already used", type(item).__name__, item.id
            )
            return REJECTED
        self._ids.reserve(item.id)
        return item.id

    def _update_epic_status(self, epic: Epic) -> None:
        statuses = [self._subtasks[sid].status for sid in epic.subtask_ids if sid in self._subtasks]
        new_status = calculate_epic_status(statuses)
        if new_status != epic.status:
            logger.debug("Epic id=%s status %s -> %s", epic.id, epic.status, new_status)
        epic.status = new_status
        self._history.refresh(epic)

    def _forget(self, ids) -> None:
        for item_id in ids:
            self._history.remove(item_id)

    # ---- tasks ----

    def add_task(self, task: Task) -> int:
        _require_kind(task, Task)
        with self._lock:
            new_id = self._assign_id(task)
            if new_id == REJECTED:
                return REJECTED
            task.id = new_id
            self._tasks[new_id] = task.copy()
            logger.debug("Task added id=%s name=%s", new_id, task.name)
            return new_id

    def get_task(self, task_id: int) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return None
            self._history.add(task)
            return task.copy()

    def update_task(self, task: Task) -> None:
        _require_kind(task, Task)
        with self._lock:
            if task.id not in self._tasks:
                logger.debug("update_task: id=%s not found, ignored", task.id)
                return
            stored = task.copy()
            self._tasks[task.id] = stored
            self._history.refresh(stored)

    def get_all_tasks(self) -> list[Task]:
        with self._lock:
            return [t.copy() for t in self._tasks.values()]

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            if self._tasks.pop(task_id, None) is None:
                return
            self._history.remove(task_id)
            logger.debug("Task deleted id=%s", task_id)

    def clear_tasks(self) -> None:
        with self._lock:
            self._forget(self._tasks)
            self._tasks.clear()

    # ---- epics ----

    def add_epic(self, epic: Epic) -> int:
        _require_kind(epic, Epic)
        with self._lock:
            new_id = self._assign_id(epic)
            if new_id == REJECTED:
                return REJECTED
            epic.id = new_id
            # The caller's epic is kept, so its derived status and subtask_ids
            # stay current; get_epic still hands out copies.
            epic.clear_subtask_ids()
            self._update_epic_status(epic)
            self._epics[new_id] = epic
            logger.debug("Epic added id=%s name=%s", new_id, epic.name)
            return new_id

    def get_epic(self, epic_id: int) -> Epic | None:
        with self._lock:
            epic = self._epics.get(epic_id)
            if epic is None:
                return None
            self._history.add(epic)
            return epic.copy()

    def update_epic(self, epic: Epic) -> None:
        """Replace name/description; subtask set and derived status are kept."""
        _require_kind(epic, Epic)
        with self._lock:
            stored = self._epics.get(epic.id)
            if stored is None:
                logger.debug("update_epic: id=%s not found, ignored", epic.id)
                return
            stored.name = epic.name
            stored.description = epic.description
            self._history.refresh(stored)

    def get_all_epics(self) -> list[Epic]:
        with self._lock:
            return [e.copy() for e in self._epics.values()]

    def get_epic_subtasks(self, epic_id: int) -> list[Subtask]:
        with self._lock:
            epic = self._epics.get(epic_id)
            if epic is None:
                return []
            return [self._subtasks[sid].copy() for sid in epic.subtask_ids if sid in self._subtasks]

    def delete_epic(self, epic_id: int) -> None:
        with self._lock:
            epic = self._epics.pop(epic_id, None)
            if epic is None:
                return
            for sid in epic.subtask_ids:
                self._subtasks.pop(sid, None)
            self._forget(epic.subtask_ids)
            self._history.remove(epic_id)
            logger.debug("Epic deleted id=%s (cascade subtasks=%s)", epic_id, epic.subtask_ids)

    def clear_epics(self) -> None:
        with self._lock:
            self._forget(self._subtasks)
            self._forget(self._epics)
            self._subtasks.clear()
            self._epics.clear()

    # ---- subtasks ----

    def add_subtask(self, subtask: Subtask) -> int:
        _require_kind(subtask, Subtask)
        with self._lock:
            if subtask.id is not None and subtask.id == subtask.epic_id:
                logger.warning("Rejected subtask id=%s: references itself as epic", subtask.id)
                return REJECTED
            epic = self._epics.get(subtask.epic_id)
            if epic is None:
                logger.warning("Rejected subtask: epic id=%s not found", subtask.epic_id)
                return REJECTED

            new_id = self._assign_id(subtask)
            if new_id == REJECTED:
                return REJECTED
            subtask.id = new_id
            self._subtasks[new_id] = subtask.copy()
            epic.add_subtask_id(new_id)
            self._update_epic_status(epic)
            logger.debug("Subtask added id=%s epic_id=%s", new_id, epic.id)
            return new_id

    def get_subtask(self, subtask_id: int) -> Subtask | None:
        with self._lock:
            subtask = self._subtasks.get(subtask_id)
            if subtask is None:
                return None
            self._history.add(subtask)
            return subtask.copy()

    def update_subtask(self, subtask: Subtask) -> None:
        """
        Replace a subtask wholesale.

        A changed epic_id moves the subtask to that epic; moving to an unknown
        epic (or to itself) is rejected and nothing changes.
        """
        _require_kind(subtask, Subtask)
        with self._lock:
            current = self._subtasks.get(subtask.id)
            if current is None:
                logger.debug("update_subtask: id=%s not found, ignored", subtask.id)
                return

            new_epic = self._epics.get(subtask.epic_id)
            if subtask.epic_id == subtask.id or new_epic is None:
                logger.warning(
                    "update_subtask id=%s: invalid epic id=%s, ignored", subtask.id, subtask.epic_id
                )
                return

            stored = subtask.copy()
            self._subtasks[subtask.id] = stored
            self._history.refresh(stored)

            if current.epic_id != subtask.epic_id:
                old_epic = self._epics.get(current.epic_id)
                if old_epic is not None:
                    old_epic.remove_subtask_id(subtask.id)
                    self._update_epic_status(old_epic)
                new_epic.add_subtask_id(subtask.id)
                logger.debug(
                    "Subtask id=%s moved epic %s -> %s", subtask.id, current.epic_id, subtask.epic_id
                )
            self._update_epic_status(new_epic)

    def get_all_subtasks(self) -> list[Subtask]:
        with self._lock:
            return [s.copy() for s in self._subtasks.values()]

    def delete_subtask(self, subtask_id: int) -> None:
        with self._lock:
            subtask = self._subtasks.pop(subtask_id, None)
            if subtask is None:
                return
            self._history.remove(subtask_id)
            epic = self._epics.get(subtask.epic_id)
            if epic is not None:
                epic.remove_subtask_id(subtask_id)
                self._update_epic_status(epic)
            logger.debug("Subtask deleted id=%s", subtask_id)

    def clear_subtasks(self) -> None:
        with self._lock:
            self._forget(self._subtasks)
            self._subtasks.clear()
            for epic in self._epics.values():
                epic.clear_subtask_ids()
                self._update_epic_status(epic)

    # ---- history ----

    def get_history(self) -> list[Task]:
        with self._lock:
            return self._history.get_history()
