"""Dry-run aware file and directory removal."""

from __future__ import annotations

import logging
import os
import shutil
import threading
from dataclasses import dataclass

from cleanmypc.utils import dir_size

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeleteOutcome:
    """Result of one removal attempt.

    ``size`` is the number of bytes freed, or that would be freed under a
    dry run.  It is 0 whenever ``deleted`` is False.
    """

    deleted: bool
    size: int = 0


class Remover:
    """Removes files and directory trees, recording failures in *errors*.

    Sizes are always measured before the removal call since a removed
    entity can no longer be stat'ed.  Under ``dry_run`` nothing on disk is
    touched; removed paths are remembered instead so that emptiness
    checks answer as they would after a live run.
    """

    def __init__(self, dry_run: bool = False, errors: list[str] | None = None) -> None:
        self.dry_run = dry_run
        self.errors = errors if errors is not None else []
        self._projected: set[str] = set()
        self._lock = threading.Lock()

    def delete_file(self, path: str) -> DeleteOutcome:
        """Remove a single file. Never raises."""
        try:
            size = os.lstat(path).st_size
            if self.dry_run:
                self._project(path)
                log.debug("Would delete file: %s (%d bytes)", path, size)
                return DeleteOutcome(True, size)
            if not os.access(path, os.W_OK):
                raise PermissionError(f"Permission denied: '{path}'")
            os.remove(path)
        except OSError as e:
            self._record(f"Failed to delete {path}: {e.strerror or e}")
            return DeleteOutcome(False)
        log.debug("Deleted file: %s (%d bytes)", path, size)
        return DeleteOutcome(True, size)

    def delete_directory(self, path: str) -> DeleteOutcome:
        """Remove a directory and everything below it. Never raises.

        The size is the sum of every contained file, walked before the
        removal.
        """
        try:
            if not os.path.isdir(path):
                raise FileNotFoundError(f"No such directory: '{path}'")
            size = dir_size(path)
            if self.dry_run:
                self._project(path)
                log.debug("Would delete directory: %s (%d bytes)", path, size)
                return DeleteOutcome(True, size)
            shutil.rmtree(path)
        except OSError as e:
            self._record(f"Failed to delete directory {path}: {e.strerror or e}")
            return DeleteOutcome(False)
        log.debug("Deleted directory: %s (%d bytes)", path, size)
        return DeleteOutcome(True, size)

    def is_directory_empty(self, path: str) -> bool:
        """Check if *path* has no children left.

        Unreadable directories count as not empty.
        """
        try:
            names = os.listdir(path)
        except OSError:
            return False
        if not self.dry_run:
            return not names
        with self._lock:
            return all(os.path.join(path, name) in self._projected for name in names)

    def _project(self, path: str) -> None:
        with self._lock:
            self._projected.add(path)

    def _record(self, message: str) -> None:
        log.debug(message)
        with self._lock:
            self.errors.append(message)
