"""Filesystem capabilities composed into every cleanup task."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from cleanmypc.core.deletion import DeleteOutcome, Remover
from cleanmypc.core.discovery import Discovery
from cleanmypc.models.context import TaskContext
from cleanmypc.models.path_entry import PathEntry

log = logging.getLogger(__name__)

_DAY = 86400  # seconds


class FileOps:
    """Discovery, deletion and age filtering bound to one task run.

    All primitives share one error list, exposed as ``errors``, which
    becomes the task result's error list.
    """

    def __init__(self, context: TaskContext) -> None:
        self.context = context
        self.errors: list[str] = []
        self._discovery = Discovery(context.config.exclusions, self.errors)
        self._remover = Remover(context.dry_run, self.errors)

    @property
    def dry_run(self) -> bool:
        return self.context.dry_run

    def discover(self, patterns: Iterable[str], *, include_hidden: bool = False) -> list[PathEntry]:
        return self._discovery.discover(patterns, include_hidden=include_hidden)

    def find_files(
        self, patterns: Iterable[str], excludes: Iterable[str] = (), *, include_hidden: bool = False
    ) -> list[str]:
        return self._discovery.find_files(patterns, excludes, include_hidden=include_hidden)

    def find_directories(
        self, patterns: Iterable[str], excludes: Iterable[str] = (), *, include_hidden: bool = False
    ) -> list[str]:
        return self._discovery.find_directories(patterns, excludes, include_hidden=include_hidden)

    def delete_file(self, path: str) -> DeleteOutcome:
        return self._remover.delete_file(path)

    def delete_directory(self, path: str) -> DeleteOutcome:
        return self._remover.delete_directory(path)

    def is_directory_empty(self, path: str) -> bool:
        return self._remover.is_directory_empty(path)

    def is_old_enough(self, path: str) -> bool:
        """Check the configured age filter for *path*.

        The file qualifies when it was modified strictly more than
        ``max_file_age`` days ago.  An age of 0 disables the filter.
        Files that cannot be stat'ed never qualify.
        """
        max_age = self.context.config.max_file_age
        if max_age == 0:
            return True
        try:
            mtime = os.stat(path).st_mtime
        except OSError:
            return False
        return self.context.clock() - mtime > max_age * _DAY

    def delete_files(self, paths: Iterable[str], *, check_age: bool = True) -> tuple[int, int]:
        """Delete *paths*, returning (files_deleted, bytes_freed)."""
        deleted = freed = 0
        for path in paths:
            if check_age and not self.is_old_enough(path):
                log.debug("Skipping file (not old enough): %s", path)
                continue
            outcome = self.delete_file(path)
            if outcome.deleted:
                deleted += 1
                freed += outcome.size
        return deleted, freed

    def remove_empty_directories(self, paths: Iterable[str]) -> int:
        """Remove each directory in *paths* that is empty, deepest first.

        Returns the number of directories removed.  Only emptied
        directories are ever passed to ``delete_directory``, so no file
        is removed here.
        """
        removed = 0
        for path in sorted(paths, key=_depth, reverse=True):
            if self.is_directory_empty(path) and self.delete_directory(path).deleted:
                removed += 1
        return removed


def _depth(path: str) -> tuple[int, str]:
    return os.path.normpath(path).count(os.sep), path
