"""Task to clean application and system cache files."""

from __future__ import annotations

import logging
import os

from cleanmypc.core.fileops import FileOps
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import TaskResult
from cleanmypc.platforms import Category, resolve_paths
from cleanmypc.utils import has_wildcard, join_pattern

log = logging.getLogger(__name__)

_CACHE_FILE_SUFFIXES = ("*.cache", "*.log", "*.tmp", "*.temp", "*~", "*.bak")


class CacheFilesTask(CleanupTask):
    """Cleans cache locations.

    A wildcard entry names files directly; a plain directory entry is
    searched recursively for cache-like files, after which emptied
    subdirectories are removed.
    """

    @property
    def id(self) -> str:
        return "cache"

    @property
    def name(self) -> str:
        return "Cache Files"

    @property
    def description(self) -> str:
        return "Removes stale cache, log and temp files from application and developer tool caches."

    def run(self) -> TaskResult:
        ops = FileOps(self.context)
        result = TaskResult(task=self.id)

        for cache_path in resolve_paths(Category.CACHE, self.host, self.config):
            try:
                deleted, freed = self._clean_path(ops, cache_path)
            except OSError as e:
                ops.errors.append(f"Error cleaning cache path {cache_path}: {e}")
                continue
            result.files_deleted += deleted
            result.space_saved += freed

        result.errors = ops.errors
        return result

    def _clean_path(self, ops: FileOps, cache_path: str) -> tuple[int, int]:
        if has_wildcard(cache_path):
            entries = ops.discover([cache_path])
            deleted, freed = ops.delete_files(e.path for e in entries if e.is_file)
            for entry in entries:
                if entry.is_dir:
                    d, f = self._clean_directory(ops, entry.path)
                    deleted += d
                    freed += f
            return deleted, freed
        if os.path.isfile(cache_path):
            return ops.delete_files(ops.find_files([join_pattern(cache_path)]))
        if os.path.isdir(cache_path):
            return self._clean_directory(ops, cache_path)
        return 0, 0

    @staticmethod
    def _clean_directory(ops: FileOps, directory: str) -> tuple[int, int]:
        log.debug("Cleaning cache path: %s", directory)
        patterns = [join_pattern(directory, "**", suffix) for suffix in _CACHE_FILE_SUFFIXES]
        deleted, freed = ops.delete_files(ops.find_files(patterns))
        deleted += ops.remove_empty_directories(ops.find_directories([join_pattern(directory, "**", "*")]))
        return deleted, freed
