# tasks/task_models.py

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import StrEnum


class TaskStatus(StrEnum):
    """Work item lifecycle status."""

    NEW = "new"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus:
        """
        Parse user input ("new", "IN_PROGRESS", "in-progress", "Done", ...).

        Raises ValueError for anything else.
        """
        key = (raw or "").strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown task status: {raw!r}") from None


@dataclass(slots=True)
class Task:
    name: str
    description: str
    status: TaskStatus = TaskStatus.NEW
    # None means "not assigned yet"; the manager fills it in on add.
    id: int | None = None

    def copy(self) -> Task:
        return copy.deepcopy(self)


@dataclass(slots=True)
class Epic(Task):
    """
    A task aggregating subtasks.

    Status is derived from subtask statuses by the manager and is never set
    by callers. subtask_ids behaves as an ordered set.
    """

    subtask_ids: list[int] = field(default_factory=list)

    def add_subtask_id(self, subtask_id: int) -> None:
        if subtask_id not in self.subtask_ids:
            self.subtask_ids.append(subtask_id)

    def remove_subtask_id(self, subtask_id: int) -> None:
        if subtask_id in self.subtask_ids:
            self.subtask_ids.remove(subtask_id)

    def clear_subtask_ids(self) -> None:
        self.subtask_ids.clear()


@dataclass(slots=True)
class Subtask(Task):
    # Back-reference only: the owning epic's subtask_ids is the source of truth.
    epic_id: int = field(kw_only=True)


def calculate_epic_status(statuses: list[TaskStatus]) -> TaskStatus:
    """
    Derive an epic status from its subtask statuses.

    - no subtasks      -> NEW
    - all NEW          -> NEW
    - all DONE         -> DONE
    - anything else    -> IN_PROGRESS
    """
    if not statuses:
        return TaskStatus.NEW
    if all(s == TaskStatus.NEW for s in statuses):
        return TaskStatus.NEW
    if all(s == TaskStatus.DONE for s in statuses):
        return TaskStatus.DONE
    return TaskStatus.IN_PROGRESS
