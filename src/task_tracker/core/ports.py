# src/task_tracker/core/ports.py

"""
Ports (interfaces) used by the core.

The console layer and the factories depend on Protocols instead of concrete
implementations, so a manager or history backend can be swapped in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Epic, Subtask, Task


class HistoryManager(Protocol):
    """Bounded, id-deduplicated record of accessed items (oldest first)."""

    def add(self, item: Task | None) -> None: ...
    def refresh(self, item: Task) -> None: ...
    def remove(self, item_id: int) -> None: ...
    def clear(self) -> None: ...
    def get_history(self) -> list[Task]: ...


class TaskManager(Protocol):
    # Tasks
    def add_task(self, task: Task) -> int: ...
    def get_task(self, task_id: int) -> Task | None: ...
    def update_task(self, task: Task) -> None: ...
    def get_all_tasks(self) -> list[Task]: ...
    def delete_task(self, task_id: int) -> None: ...
    def clear_tasks(self) -> None: ...

    # Epics
    def add_epic(self, epic: Epic) -> int: ...
    def get_epic(self, epic_id: int) -> Epic | None: ...
    def update_epic(self, epic: Epic) -> None: ...
    def get_all_epics(self) -> list[Epic]: ...
    def get_epic_subtasks(self, epic_id: int) -> list[Subtask]: ...
    def delete_epic(self, epic_id: int) -> None: ...
    def clear_epics(self) -> None: ...

    # Subtasks
    def add_subtask(self, subtask: Subtask) -> int: ...
    def get_subtask(self, subtask_id: int) -> Subtask | None: ...
    def update_subtask(self, subtask: Subtask) -> None: ...
    def get_all_subtasks(self) -> list[Subtask]: ...
    def delete_subtask(self, subtask_id: int) -> None: ...
    def clear_subtasks(self) -> None: ...

    # History
    def get_history(self) -> list[Task]: ...
