# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import TaskManager


@dataclass
class AppState:
    # Settings object (config.Settings or a test double with the same attributes).
    settings: object

    manager: TaskManager
