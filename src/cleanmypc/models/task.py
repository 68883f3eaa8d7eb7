"""Cleanup task interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cleanmypc.models.context import TaskContext
from cleanmypc.models.task_result import TaskResult


class CleanupTask(ABC):
    """Base class for the six cleanup tasks.

    A task is constructed with a ``TaskContext`` and produces one
    ``TaskResult`` per ``run()``.  Filesystem primitives are not inherited;
    each run builds its own ``FileOps`` so errors never leak between runs.
    """

    def __init__(self, context: TaskContext) -> None:
        self.context = context

    @property
    @abstractmethod
    def id(self) -> str:
        """Task identifier, e.g. 'temp'."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name, e.g. 'Temporary Files'."""

    @property
    @abstractmethod
    def description(self) -> str:
        """What this task does."""

    @property
    def config(self):
        return self.context.config

    @property
    def host(self):
        return self.context.host

    @abstractmethod
    def run(self) -> TaskResult:
        """Execute the task. MUST NOT mutate the filesystem under dry run."""
