"""Task to clean web browser caches."""

from __future__ import annotations

import logging
import os

from cleanmypc.core.fileops import FileOps
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import TaskResult
from cleanmypc.platforms import browser_paths
from cleanmypc.utils import has_wildcard, join_pattern

log = logging.getLogger(__name__)

_LABELS = {
    "chrome": "Chrome",
    "firefox": "Firefox",
    "edge": "Edge",
    "safari": "Safari",
}


class BrowserCacheTask(CleanupTask):
    """Empties the cache directories of every enabled browser."""

    @property
    def id(self) -> str:
        return "browsers"

    @property
    def name(self) -> str:
        return "Browser Caches"

    @property
    def description(self) -> str:
        return "Removes cached pages, scripts, shaders and media of Chrome, Firefox, Edge and Safari."

    def run(self) -> TaskResult:
        ops = FileOps(self.context)
        result = TaskResult(task=self.id)

        for browser in self.config.browsers.enabled():
            label = _LABELS[browser]
            for cache_path in browser_paths(browser, self.host):
                try:
                    deleted, freed = self._clean_path(ops, cache_path)
                except OSError as e:
                    ops.errors.append(f"Error cleaning {label} cache at {cache_path}: {e}")
                    continue
                if deleted:
                    log.info("%s cache %s: %d entries, %d bytes", label, cache_path, deleted, freed)
                result.files_deleted += deleted
                result.space_saved += freed

        result.errors = ops.errors
        return result

    def _clean_path(self, ops: FileOps, cache_path: str) -> tuple[int, int]:
        if has_wildcard(cache_path):
            entries = ops.discover([cache_path])
        elif os.path.lexists(cache_path):
            entries = ops.discover([join_pattern(cache_path)])
        else:
            return 0, 0

        deleted, freed = ops.delete_files(e.path for e in entries if e.is_file)
        for entry in entries:
            if entry.is_dir:
                d, f = self._clean_directory(ops, entry.path)
                deleted += d
                freed += f
        return deleted, freed

    @staticmethod
    def _clean_directory(ops: FileOps, directory: str) -> tuple[int, int]:
        """Delete everything old enough below *directory*, then remove the
        emptied subdirectories and, if nothing is left, *directory* too."""
        entries = ops.discover([join_pattern(directory, "**", "*")])
        deleted, freed = ops.delete_files(e.path for e in entries if e.is_file)
        deleted += ops.remove_empty_directories([e.path for e in entries if e.is_dir])
        deleted += ops.remove_empty_directories([directory])
        return deleted, freed
