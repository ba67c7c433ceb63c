# src/task_tracker/errors.py

"""
Exception taxonomy.

- StoreError: the backing file cannot be read/written or is malformed. Fatal.
- ValidationError: bad user input (empty description, unknown status).
- TaskNotFoundError: no task with the given id.

Only StoreError is meant to reach the entrypoint; the other two are handled
by the command handlers and reported as plain messages.
"""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base class for all task-tracker errors."""


class StoreError(TaskTrackerError):
    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path is None:
            return msg
        return f"{msg} ({self.path})"


class ValidationError(TaskTrackerError, ValueError):
    pass


class TaskNotFoundError(TaskTrackerError, LookupError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id
