"""Ordered registry of cleanup tasks."""

from __future__ import annotations

import logging
from typing import Iterator

from cleanmypc.models.context import TaskContext
from cleanmypc.models.task import CleanupTask

log = logging.getLogger(__name__)


class TaskRegistry:
    """Stores cleanup tasks in registration order, which is run order."""

    def __init__(self) -> None:
        self._tasks: dict[str, CleanupTask] = {}

    @classmethod
    def with_builtin_tasks(cls, context: TaskContext) -> TaskRegistry:
        """Registry holding the six built-in tasks in canonical order."""
        from cleanmypc.tasks import BUILTIN_TASKS

        registry = cls()
        for task_cls in BUILTIN_TASKS:
            registry.register(task_cls(context))
        return registry

    def register(self, task: CleanupTask) -> None:
        """Register a task instance."""
        if task.id in self._tasks:
            log.warning("Task '%s' already registered, skipping duplicate", task.id)
            return
        self._tasks[task.id] = task
        log.debug("Registered task: %s (%s)", task.id, task.name)

    def get(self, task_id: str) -> CleanupTask | None:
        """Get a task by its ID."""
        return self._tasks.get(task_id)

    def ids(self) -> list[str]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[CleanupTask]:
        return iter(self._tasks.values())

    def __contains__(self, task_id: str) -> bool:
        return task_id in self._tasks
