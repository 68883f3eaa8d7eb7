"""Task to empty the trash / recycle bin."""

from __future__ import annotations

import logging
import os

from cleanmypc.core.fileops import FileOps
from cleanmypc.core.trash import layout_for
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import TaskResult
from cleanmypc.platforms import Category, resolve_paths
from cleanmypc.utils import has_wildcard

log = logging.getLogger(__name__)


class TrashTask(CleanupTask):
    """Permanently deletes everything in the platform's trash locations."""

    @property
    def id(self) -> str:
        return "trash"

    @property
    def name(self) -> str:
        return "Trash"

    @property
    def description(self) -> str:
        return "Permanently deletes files in the trash or recycle bin. These files were already deleted by the user."

    def run(self) -> TaskResult:
        ops = FileOps(self.context)
        roots = self._trash_roots(ops)
        log.debug("Trash roots: %s", roots)

        outcome = layout_for(self.host.platform, ops).empty_trash(roots)
        return TaskResult(
            task=self.id,
            files_deleted=outcome.files_deleted,
            space_saved=outcome.space_saved,
            errors=ops.errors,
        )

    def _trash_roots(self, ops: FileOps) -> list[str]:
        """Concrete trash directories, with wildcard entries expanded."""
        roots: list[str] = []
        for path in resolve_paths(Category.TRASH, self.host, self.config):
            if has_wildcard(path):
                matches = ops.find_directories([path], include_hidden=True)
            elif os.path.isdir(path):
                matches = [path]
            else:
                continue
            roots.extend(m for m in matches if m not in roots)
        return roots
