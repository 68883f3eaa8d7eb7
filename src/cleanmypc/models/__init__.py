"""cleanmypc data models."""

from cleanmypc.models.context import TaskContext
from cleanmypc.models.path_entry import PathEntry
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import LargeFile, RunSummary, TaskResult

__all__ = [
    "CleanupTask",
    "LargeFile",
    "PathEntry",
    "RunSummary",
    "TaskContext",
    "TaskResult",
]
