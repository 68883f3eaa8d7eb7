"""Cleanup orchestration engine."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from cleanmypc.core.registry import TaskRegistry
from cleanmypc.models.context import TaskContext
from cleanmypc.models.task_result import RunSummary, TaskResult

log = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]  # (task_id, status_message)
ResultCallback = Callable[[TaskResult], None]

TEMP = "temp"
CACHE = "cache"
BROWSERS = "browsers"
TRASH = "trash"
DOWNLOADS = "downloads"
LARGE_FILES = "large_files"

TASK_ORDER = (TEMP, CACHE, BROWSERS, TRASH, DOWNLOADS, LARGE_FILES)


class CleanupEngine:
    """Runs cleanup tasks one after another and collects their results.

    A task that raises does not stop the run: the failure is logged and
    recorded as a zero-count result carrying one error.
    """

    def __init__(
        self,
        context: TaskContext,
        registry: TaskRegistry | None = None,
        on_progress: ProgressCallback | None = None,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.context = context
        self.registry = registry if registry is not None else TaskRegistry.with_builtin_tasks(context)
        self.on_progress = on_progress
        self.on_result = on_result
        self._results: list[TaskResult] = []

    @property
    def results(self) -> list[TaskResult]:
        """Results of this run, in invocation order."""
        return list(self._results)

    def summary(self) -> RunSummary:
        return RunSummary.from_results(self._results)

    def run_task(self, task_id: str) -> TaskResult:
        """Run a single task, isolating any failure."""
        task = self.registry.get(task_id)
        if task is None:
            raise KeyError(f"Unknown task '{task_id}'")

        if self.on_progress:
            self.on_progress(task_id, "running")
        try:
            result = task.run()
            status = "warning" if result.errors else "done"
        except Exception as e:
            log.exception("Task '%s' crashed", task_id)
            result = TaskResult(task=task_id, errors=[f"Task crashed: {e}"])
            if task_id == DOWNLOADS:
                result.files_organized = 0
            elif task_id == LARGE_FILES:
                result.large_files = []
            status = "error"

        self._results.append(result)
        if self.on_result:
            self.on_result(result)
        if self.on_progress:
            self.on_progress(task_id, status)
        return result

    def run(self, task_ids: Iterable[str]) -> list[TaskResult]:
        """Run the given tasks in canonical order; unknown IDs are skipped."""
        wanted = set(task_ids)
        results: list[TaskResult] = []
        for task_id in self.registry.ids():
            if task_id in wanted:
                results.append(self.run_task(task_id))
        for task_id in sorted(wanted - set(self.registry.ids())):
            log.warning("Task '%s' not found, skipping", task_id)
        return results

    def run_all(self) -> list[TaskResult]:
        """Run every registered task: temp, cache, browsers, trash,
        downloads, large files."""
        log.info("Starting cleanup of %d tasks (dry run: %s)", len(self.registry), self.context.dry_run)
        return self.run(self.registry.ids())

    def clean_temp(self) -> TaskResult:
        return self.run_task(TEMP)

    def clean_cache(self) -> TaskResult:
        return self.run_task(CACHE)

    def clean_browsers(self) -> TaskResult:
        return self.run_task(BROWSERS)

    def empty_trash(self) -> TaskResult:
        return self.run_task(TRASH)

    def organize_downloads(self) -> TaskResult:
        return self.run_task(DOWNLOADS)

    def find_large_files(self) -> TaskResult:
        return self.run_task(LARGE_FILES)

    def delete_large_files(self, paths: Iterable[str]) -> TaskResult:
        """Delete large files picked from an earlier scan.

        The outcome is appended to the run results.
        """
        task = self.registry.get(LARGE_FILES)
        if task is None:
            raise KeyError(f"Unknown task '{LARGE_FILES}'")
        result = task.delete_large_files(paths)
        self._results.append(result)
        if self.on_result:
            self.on_result(result)
        return result
