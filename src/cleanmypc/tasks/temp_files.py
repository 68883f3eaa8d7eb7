"""Task to clean temporary files."""

from __future__ import annotations

import logging
import os

from cleanmypc.core.fileops import FileOps
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import TaskResult
from cleanmypc.platforms import Category, resolve_paths
from cleanmypc.utils import join_pattern

log = logging.getLogger(__name__)

# Relative to each temp directory.
_TEMP_FILE_PATTERNS = (
    ("*.tmp",),
    ("*.temp",),
    ("*~",),
    ("*.log",),
    ("*.bak",),
    ("*.old",),
    ("*.cache",),
    ("**", "*.tmp"),
    ("**", "*.temp"),
    ("**", "*.log"),
    ("**", "*.cache"),
    ("**", "*~"),
    ("Temporary Internet Files", "**", "*"),
    ("IETldCache", "**", "*"),
    ("chrome_*", "**", "*"),
    ("tmp*", "**", "*"),
    ("*_tmp", "**", "*"),
    ("*tmp*",),
    ("*temp*",),
    ("*cache*",),
)


class TempFilesTask(CleanupTask):
    """Removes temp-looking files older than the configured age, then
    empty top-level folders of each temp directory."""

    @property
    def id(self) -> str:
        return "temp"

    @property
    def name(self) -> str:
        return "Temporary Files"

    @property
    def description(self) -> str:
        return "Removes temporary, backup and log files from the system and user temp directories."

    def run(self) -> TaskResult:
        ops = FileOps(self.context)
        result = TaskResult(task=self.id)

        for temp_dir in resolve_paths(Category.TEMP, self.host, self.config):
            if not os.path.isdir(temp_dir):
                continue
            log.debug("Cleaning temp path: %s", temp_dir)
            patterns = [join_pattern(temp_dir, *parts) for parts in _TEMP_FILE_PATTERNS]
            deleted, freed = ops.delete_files(ops.find_files(patterns))
            deleted += ops.remove_empty_directories(ops.find_directories([join_pattern(temp_dir, "*")]))
            result.files_deleted += deleted
            result.space_saved += freed

        result.errors = ops.errors
        return result
