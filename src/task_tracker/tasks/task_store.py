# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import uuid
from datetime import timedelta
from pathlib import Path

from ..errors import StoreError, TaskNotFoundError, ValidationError
from .task_models import Task, TaskStatus, utc_now

logger = logging.getLogger(__name__)

ID_LENGTH = 8


class TaskStore:
    """
    JSON file task store.

    The file holds one JSON array of task objects and is the only source of truth:
    every public operation loads the whole document, mutates it in memory and
    writes the whole document back. Nothing is cached between calls.

    Concurrency:
    - no locking; two processes writing at the same time race (last write wins)
    - saves go through a temp file + os.replace, so a reader never sees a half-written file
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def initialize(self) -> None:
        """Create the backing file with an empty array if it does not exist yet."""
        if self._path.exists():
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(f"Cannot create data directory: {exc}", self._path) from exc
        self.save([])
        logger.info("TaskStore initialized empty file=%s", self._path)

    def load(self) -> list[Task]:
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise StoreError(f"Error reading tasks file: {exc}", self._path) from exc

        try:
            raw = json.loads(data.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise StoreError(f"Tasks file is not valid UTF-8: {exc}", self._path) from exc
        except (ValueError, RecursionError) as exc:
            raise StoreError(f"Tasks file is not valid JSON: {exc}", self._path) from exc

        if not isinstance(raw, list):
            raise StoreError("Tasks file must contain a JSON array", self._path)

        tasks: list[Task] = []
        seen: set[str] = set()
        for pos, entry in enumerate(raw):
            try:
                task = Task.from_dict(entry)
            except (TypeError, ValueError, KeyError) as exc:
                raise StoreError(f"Malformed task at index {pos}: {exc}", self._path) from exc
            if task.id in seen:
                raise StoreError(f"Duplicate task id {task.id!r} at index {pos}", self._path)
            seen.add(task.id)
            tasks.append(task)

        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: list[Task]) -> None:
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False, indent=2) + "\n"
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StoreError(f"Error writing tasks file: {exc}", self._path) from exc
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    @staticmethod
    def _new_id(taken: set[str]) -> str:
        while True:
            task_id = uuid.uuid4().hex[:ID_LENGTH]
            if task_id not in taken:
                return task_id

    @staticmethod
    def _touch(task: Task) -> None:
        # updatedAt must strictly increase even if the clock did not move.
        now = utc_now()
        floor = task.updated_at + timedelta(microseconds=1)
        task.updated_at = now if now >= floor else floor
        task.updated_raw = None

    @staticmethod
    def _clean_description(description: str | None) -> str:
        text = (description or "").strip()
        if not text:
            raise ValidationError("description is required")
        return text

    @staticmethod
    def _find(tasks: list[Task], task_id: str) -> Task:
        for task in tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    # ---- public API ----

    def add(self, description: str) -> Task:
        text = self._clean_description(description)

        tasks = self.load()
        now = utc_now()
        task = Task(
            id=self._new_id({t.id for t in tasks}),
            description=text,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        tasks.append(task)
        self.save(tasks)
        logger.debug("Task added id=%s", task.id)
        return task

    def get_task(self, task_id: str) -> Task:
        return self._find(self.load(), task_id)

    def update(self, task_id: str, description: str) -> Task:
        text = self._clean_description(description)

        tasks = self.load()
        task = self._find(tasks, task_id)
        task.description = text
        self._touch(task)
        self.save(tasks)
        logger.debug("Task updated id=%s", task.id)
        return task

    def set_status(self, task_id: str, status: str | TaskStatus) -> Task:
        """
        Move a task to `status`.

        The status is validated before the file is read, so a bad value never
        touches the store.
        """
        new_status = TaskStatus.parse(status)

        tasks = self.load()
        task = self._find(tasks, task_id)
        task.status = new_status
        self._touch(task)
        self.save(tasks)
        logger.debug("Task status id=%s status=%s", task.id, new_status.value)
        return task

    def delete(self, task_id: str) -> Task:
        tasks = self.load()
        task = self._find(tasks, task_id)
        self.save([t for t in tasks if t.id != task_id])
        logger.debug("Task deleted id=%s", task_id)
        return task

    def list_tasks(self, status: str | TaskStatus | None = None) -> list[Task]:
        """All tasks in creation order, or only those with the given status."""
        wanted = TaskStatus.parse(status) if status is not None else None
        tasks = self.load()
        if wanted is None:
            return tasks
        return [t for t in tasks if t.status == wanted]
