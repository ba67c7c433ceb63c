# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..errors import TaskNotFoundError, ValidationError
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Command registry used by the CLI entrypoint (add, list, status, ...)."""

    def __init__(self, prog: str = "task-cli") -> None:
        self.prog = prog
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str = "",
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = (usage, help_text)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def usage(self, name: str) -> str:
        usage, _ = self._help.get(name, ("", ""))
        return f"Usage: {self.prog} {name} {usage}".rstrip()

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Run one command line (without the program name) and return the reply.

        Empty or unknown commands return the general help text. StoreError is
        not caught here: a broken store is fatal for the caller to handle.
        """
        if not argv:
            return self.build_help()

        name = argv[0].lower()
        handler = self._handlers.get(name)
        if handler is None:
            logger.debug("Unknown command %r", name)
            return f"Unknown command: {argv[0]}\n\n{self.build_help()}"

        return handler(state, argv[1:])

    def build_help(self) -> str:
        entries = [(f"{name} {usage}".rstrip(), text) for name, (usage, text) in self._help.items()]
        width = max(len(left) for left, _ in entries)
        lines = [f"Usage: {self.prog} <command> [args...]", "", "Commands:"]
        for left, text in entries:
            lines.append(f"  {left.ljust(width)}  {text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def _ts_local(ts: datetime) -> str:
    return ts.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def format_task(task: Task) -> str:
    return (
        f"ID: {task.id}\n"
        f"Description: {task.description}\n"
        f"Status: {task.status.value}\n"
        f"Created: {_ts_local(task.created_at)}\n"
        f"Updated: {_ts_local(task.updated_at)}"
    )


def format_task_row(task: Task) -> str:
    return (
        f"[{task.status.value}] {task.id}: {task.description} "
        f"(created {_ts_local(task.created_at)}, updated {_ts_local(task.updated_at)})"
    )


def _join(args: list[str]) -> str:
    return " ".join(args).strip()


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    description = _join(args)
    if not description:
        return registry.usage("add")
    try:
        task = state.task_store.add(description)
    except ValidationError as e:
        return f"{e}\n{registry.usage('add')}"
    return (
        "Task added successfully:\n"
        f"ID: {task.id}\n"
        f"Description: {task.description}\n"
        f"Status: {task.status.value}"
    )


def cmd_update(state: AppState, args: list[str]) -> str:
    if len(args) < 2 or not _join(args[1:]):
        return registry.usage("update")
    task_id = args[0]
    try:
        task = state.task_store.update(task_id, _join(args[1:]))
    except ValidationError as e:
        return f"{e}\n{registry.usage('update')}"
    except TaskNotFoundError as e:
        return str(e)
    return f"Task updated successfully:\n{format_task(task)}"


def _set_status(state: AppState, task_id: str, status: str, command: str) -> str:
    try:
        task = state.task_store.set_status(task_id, status)
    except ValidationError as e:
        return f"{e}\n{registry.usage(command)}"
    except TaskNotFoundError as e:
        return str(e)
    return f"Task status updated successfully:\n{format_task(task)}"


def cmd_status(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return registry.usage("status")
    return _set_status(state, args[0], args[1], "status")


def _mark(status: TaskStatus) -> CommandHandler:
    command = f"mark-{status.value}"

    def handler(state: AppState, args: list[str]) -> str:
        if len(args) != 1:
            return registry.usage(command)
        return _set_status(state, args[0], status.value, command)

    return handler


def cmd_delete(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return registry.usage("delete")
    try:
        task = state.task_store.delete(args[0])
    except TaskNotFoundError as e:
        return str(e)
    return f"Task deleted successfully (ID: {task.id})"


def cmd_show(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return registry.usage("show")
    try:
        task = state.task_store.get_task(args[0])
    except TaskNotFoundError as e:
        return str(e)
    return format_task(task)


def _list(state: AppState, status: str | None, command: str) -> str:
    try:
        tasks = state.task_store.list_tasks(status)
    except ValidationError as e:
        return f"{e}\n{registry.usage(command)}"
    if not tasks:
        return "No tasks found." if status is None else f"No tasks found with status: {status}"
    return "\n".join(format_task_row(t) for t in tasks)


def cmd_list(state: AppState, args: list[str]) -> str:
    if len(args) > 1:
        return registry.usage("list")
    return _list(state, args[0] if args else None, "list")


def _list_only(status: TaskStatus) -> CommandHandler:
    command = f"list-{status.value}"

    def handler(state: AppState, args: list[str]) -> str:
        if args:
            return registry.usage(command)
        return _list(state, status.value, command)

    return handler


registry.register("add", cmd_add, help_text="Add a new task.", usage="<description>")
registry.register(
    "update", cmd_update, help_text="Change a task's description.", usage="<id> <description>"
)
registry.register(
    "status",
    cmd_status,
    help_text="Set status: todo | in-progress | done.",
    usage="<id> <status>",
)
for _status in TaskStatus:
    registry.register(
        f"mark-{_status.value}",
        _mark(_status),
        help_text=f"Shorthand for: status <id> {_status.value}.",
        usage="<id>",
    )
registry.register("delete", cmd_delete, help_text="Delete a task.", usage="<id>")
registry.register("show", cmd_show, help_text="Show one task in full.", usage="<id>")
registry.register(
    "list", cmd_list, help_text="List tasks, optionally only one status.", usage="[status]"
)
for _status in TaskStatus:
    registry.register(
        f"list-{_status.value}",
        _list_only(_status),
        help_text=f"Shorthand for: list {_status.value}.",
    )
registry.register("help", cmd_help, help_text="Show available commands.", aliases=["-h", "--help"])
