"""Task to sort loose downloads into category folders."""

from __future__ import annotations

import logging
import os
import shutil

from cleanmypc.core.fileops import FileOps
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import TaskResult
from cleanmypc.utils import is_hidden, join_pattern

log = logging.getLogger(__name__)


def unique_name(directory: str, file_name: str, taken: set[str] | frozenset[str] = frozenset()) -> str:
    """Return *file_name*, or ``"stem (n).ext"`` with the smallest n >= 1
    that exists neither in *directory* nor in *taken*."""
    stem, ext = os.path.splitext(file_name)
    candidate = file_name
    counter = 1
    while candidate in taken or os.path.lexists(os.path.join(directory, candidate)):
        candidate = f"{stem} ({counter}){ext}"
        counter += 1
    return candidate


class DownloadsTask(CleanupTask):
    """Moves top-level files of the downloads folder into category
    subfolders chosen by extension.  Existing subfolders are never
    entered and files without a matching category stay where they are.
    """

    @property
    def id(self) -> str:
        return "downloads"

    @property
    def name(self) -> str:
        return "Organize Downloads"

    @property
    def description(self) -> str:
        return "Sorts files in the downloads folder into Images, Documents, Archives and other category folders."

    def run(self) -> TaskResult:
        ops = FileOps(self.context)
        result = TaskResult(task=self.id, files_organized=0)

        if not self.config.organize_downloads:
            result.errors.append("Downloads organization is disabled in config")
            return result

        downloads = self.config.downloads_path
        if not os.path.isdir(downloads):
            result.errors.append(f"Downloads folder not found: {downloads}")
            return result

        # destination dir -> names claimed by this run
        claimed: dict[str, set[str]] = {}
        for path in ops.find_files([join_pattern(downloads, "*")]):
            if self._organize_file(ops, path, downloads, claimed):
                result.files_organized += 1

        result.errors = ops.errors
        return result

    def _organize_file(self, ops: FileOps, path: str, downloads: str, claimed: dict[str, set[str]]) -> bool:
        file_name = os.path.basename(path)
        extension = os.path.splitext(file_name)[1].lower()
        if not extension or is_hidden(file_name):
            return False

        category = self.config.category_for(extension)
        if category is None:
            return False

        destination_dir = os.path.join(downloads, category)
        if os.path.lexists(destination_dir) and not os.path.isdir(destination_dir):
            ops.errors.append(f"Failed to organize file {path}: {destination_dir} is not a directory")
            return False
        taken = claimed.setdefault(destination_dir, set())
        target_name = unique_name(destination_dir, file_name, taken)
        target = os.path.join(destination_dir, target_name)

        if ops.dry_run:
            log.info("Would move %s -> %s", path, target)
        else:
            try:
                os.makedirs(destination_dir, exist_ok=True)
                shutil.move(path, target)
            except OSError as e:
                ops.errors.append(f"Failed to organize file {path}: {e}")
                return False
            log.info("Moved %s -> %s", path, target)

        taken.add(target_name)
        return True
