# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_manager import REJECTED
from ..tasks.task_models import Epic, Subtask, Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /task, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / formatting helpers ----


def _parse_id(raw: str | None) -> int | None:
    try:
        return int(raw) if raw is not None else None
    except ValueError:
        return None


def _split_fields(words: list[str]) -> list[str]:
    """"a b | c d | done" -> ["a b", "c d", "done"]"""
    return [p.strip() for p in " ".join(words).split("|")]


def format_item(item: Task) -> str:
    line = f"#{item.id} [{item.status.value}] {item.name}"
    if item.description:
        line += f" - {item.description}"
    if isinstance(item, Epic):
        subs = ", ".join(str(s) for s in item.subtask_ids) or "none"
        line += f" (subtasks: {subs})"
    elif isinstance(item, Subtask):
        line += f" (epic #{item.epic_id})"
    return line


def _format_list(title: str, items: list[Task]) -> str:
    if not items:
        return f"{title}: empty."
    return "\n".join([f"{title}:"] + [f"  {format_item(i)}" for i in items])


def _common(state: AppState, kind: str, sub: str, args: list[str]) -> str | None:
    """get/del/list/clear are identical for every kind; returns None for other subcommands."""
    manager = state.manager
    plural = "subtasks" if kind == "subtask" else f"{kind}s"

    if sub == "get":
        item_id = _parse_id(args[0] if args else None)
        if item_id is None:
            return "Usage: get <id>"
        item = getattr(manager, f"get_{kind}")(item_id)
        return format_item(item) if item is not None else f"No {kind} with id={item_id}."

    if sub in ("del", "delete", "rm"):
        item_id = _parse_id(args[0] if args else None)
        if item_id is None:
            return "Usage: del <id>"
        getattr(manager, f"delete_{kind}")(item_id)
        return f"Deleted {kind} #{item_id} (if it existed)."

    if sub in ("list", "ls"):
        return _format_list(plural.capitalize(), getattr(manager, f"get_all_{plural}")())

    if sub == "clear":
        getattr(manager, f"clear_{plural}")()
        return f"All {plural} removed."

    return None


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    m = state.manager
    limit = getattr(state.settings, "history_limit", "?")
    return (
        "Status:\n"
        f"  Tasks: {len(m.get_all_tasks())}\n"
        f"  Epics: {len(m.get_all_epics())}\n"
        f"  Subtasks: {len(m.get_all_subtasks())}\n"
        f"  History: {len(m.get_history())}/{limit}"
    )


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task add <name> | <description> [| <status>]
    /task update <id> <name> | <description> | <status>
    /task get|del <id>, /task list, /task clear
    """
    usage = (
        "Usage:\n"
        "  /task add <name> | <description> [| <status>]\n"
        "  /task update <id> <name> | <description> | <status>\n"
        "  /task get|del <id>  /task list  /task clear"
    )
    if not args:
        return usage
    sub, rest = args[0].lower(), args[1:]

    common = _common(state, "task", sub, rest)
    if common is not None:
        return common

    if sub == "add":
        fields = _split_fields(rest)
        if not fields[0]:
            return usage
        status = TaskStatus.parse(fields[2]) if len(fields) > 2 else TaskStatus.NEW
        desc = fields[1] if len(fields) > 1 else ""
        new_id = state.manager.add_task(Task(fields[0], desc, status))
        return f"Task added: #{new_id}"

    if sub == "update":
        task_id = _parse_id(rest[0] if rest else None)
        fields = _split_fields(rest[1:])
        if task_id is None or len(fields) < 3:
            return usage
        state.manager.update_task(Task(fields[0], fields[1], TaskStatus.parse(fields[2]), id=task_id))
        return f"Task #{task_id} updated (if it existed)."

    return usage


def cmd_epic(state: AppState, args: list[str]) -> str:
    """
    /epic add <name> | <description>
    /epic update <id> <name> | <description>
    /epic subs <id>, /epic get|del <id>, /epic list, /epic clear
    """
    usage = (
        "Usage:\n"
        "  /epic add <name> | <description>\n"
        "  /epic update <id> <name> | <description>\n"
        "  /epic subs <id>  /epic get|del <id>  /epic list  /epic clear"
    )
    if not args:
        return usage
    sub, rest = args[0].lower(), args[1:]

    common = _common(state, "epic", sub, rest)
    if common is not None:
        return common

    if sub == "add":
        fields = _split_fields(rest)
        if not fields[0]:
            return usage
        desc = fields[1] if len(fields) > 1 else ""
        new_id = state.manager.add_epic(Epic(fields[0], desc))
        return f"Epic added: #{new_id}"

    if sub == "update":
        epic_id = _parse_id(rest[0] if rest else None)
        fields = _split_fields(rest[1:])
        if epic_id is None or len(fields) < 2:
            return usage
        state.manager.update_epic(Epic(fields[0], fields[1], id=epic_id))
        return f"Epic #{epic_id} updated (if it existed)."

    if sub == "subs":
        epic_id = _parse_id(rest[0] if rest else None)
        if epic_id is None:
            return usage
        return _format_list(f"Subtasks of epic #{epic_id}", state.manager.get_epic_subtasks(epic_id))

    return usage


def cmd_sub(state: AppState, args: list[str]) -> str:
    """
    /sub add <epic_id> <name> | <description> [| <status>]
    /sub update <id> <epic_id> <name> | <description> | <status>
    /sub get|del <id>, /sub list, /sub clear
    """
    usage = (
        "Usage:\n"
        "  /sub add <epic_id> <name> | <description> [| <status>]\n"
        "  /sub update <id> <epic_id> <name> | <description> | <status>\n"
        "  /sub get|del <id>  /sub list  /sub clear"
    )
    if not args:
        return usage
    sub, rest = args[0].lower(), args[1:]

    common = _common(state, "subtask", sub, rest)
    if common is not None:
        return common

    if sub == "add":
        epic_id = _parse_id(rest[0] if rest else None)
        fields = _split_fields(rest[1:])
        if epic_id is None or not fields[0]:
            return usage
        status = TaskStatus.parse(fields[2]) if len(fields) > 2 else TaskStatus.NEW
        desc = fields[1] if len(fields) > 1 else ""
        new_id = state.manager.add_subtask(Subtask(fields[0], desc, status, epic_id=epic_id))
        if new_id == REJECTED:
            return f"Subtask rejected: epic #{epic_id} not found or invalid."
        return f"Subtask added: #{new_id} (epic #{epic_id})"

    if sub == "update":
        sub_id = _parse_id(rest[0] if rest else None)
        epic_id = _parse_id(rest[1] if len(rest) > 1 else None)
        fields = _split_fields(rest[2:])
        if sub_id is None or epic_id is None or len(fields) < 3:
            return usage
        state.manager.update_subtask(
            Subtask(fields[0], fields[1], TaskStatus.parse(fields[2]), id=sub_id, epic_id=epic_id)
        )
        return f"Subtask #{sub_id} updated (if it existed)."

    return usage


def cmd_history(state: AppState, args: list[str]) -> str:
    return _format_list("Recently viewed", state.manager.get_history())


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show item counts and history size.")
registry.register("task", cmd_task, help_text="Tasks: /task add|get|update|del|list|clear.")
registry.register("epic", cmd_epic, help_text="Epics: /epic add|get|update|subs|del|list|clear.")
registry.register(
    "sub", cmd_sub, help_text="Subtasks: /sub add|get|update|del|list|clear.", aliases=["subtask"]
)
registry.register("history", cmd_history, help_text="Show recently viewed items.", aliases=["hist"])
