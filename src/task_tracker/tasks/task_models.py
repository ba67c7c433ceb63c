# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from ..errors import ValidationError

# On-disk keys use camelCase (shared with other task-tracker implementations).
FIELD_KEYS = ("id", "description", "status", "createdAt", "updatedAt")


class TaskStatus(StrEnum):
    """
    Task status.

    Any status may move to any other one; there is no enforced workflow.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | None) -> TaskStatus:
        """Strict lookup: unknown values raise ValidationError."""
        if raw is not None:
            try:
                return cls(raw)
            except ValueError:
                pass
        allowed = ", ".join(s.value for s in cls)
        raise ValidationError(f"Invalid status {raw!r}. Must be one of: {allowed}")


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_ts(ts: datetime) -> str:
    return ts.astimezone(UTC).isoformat(timespec="microseconds")


def parse_ts(raw: str) -> datetime:
    ts = datetime.fromisoformat(raw)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


@dataclass(slots=True)
class Task:
    id: str
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    # Timestamp strings as read from disk, written back unchanged until the value changes.
    created_raw: str | None = field(default=None, compare=False, repr=False)
    updated_raw: str | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_raw or format_ts(self.created_at),
            "updatedAt": self.updated_raw or format_ts(self.updated_at),
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from one decoded JSON object.

        Raises ValueError/TypeError/KeyError on anything malformed; the store
        turns those into StoreError.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task entry must be an object, got {type(raw).__name__}")
        for key in FIELD_KEYS:
            if not isinstance(raw.get(key), str):
                raise ValueError(f"task entry field {key!r} missing or not a string")
        return cls(
            id=raw["id"],
            description=raw["description"],
            status=TaskStatus(raw["status"]),
            created_at=parse_ts(raw["createdAt"]),
            updated_at=parse_ts(raw["updatedAt"]),
            created_raw=raw["createdAt"],
            updated_raw=raw["updatedAt"],
        )
