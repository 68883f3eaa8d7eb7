"""Trash and recycle-bin layouts."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from cleanmypc.core.fileops import FileOps
from cleanmypc.platforms import Platform
from cleanmypc.utils import join_pattern

log = logging.getLogger(__name__)


@dataclass(slots=True)
class TrashOutcome:
    files_deleted: int = 0
    space_saved: int = 0

    def add(self, other: TrashOutcome) -> None:
        self.files_deleted += other.files_deleted
        self.space_saved += other.space_saved


class TrashLayout(ABC):
    """Strategy for emptying one platform's on-disk trash structure."""

    def __init__(self, ops: FileOps) -> None:
        self.ops = ops

    def empty_trash(self, roots: Iterable[str]) -> TrashOutcome:
        """Empty every trash directory in *roots*.

        A failure inside one root is recorded and the next root is still
        processed.
        """
        total = TrashOutcome()
        for root in roots:
            try:
                total.add(self.empty_root(root))
            except OSError as e:
                self.ops.errors.append(f"Error emptying trash directory {root}: {e}")
        return total

    @abstractmethod
    def empty_root(self, root: str) -> TrashOutcome:
        """Empty a single concrete trash directory."""

    def purge_tree(self, directory: str) -> TrashOutcome:
        """Delete every file below *directory*, then its emptied
        subdirectories deepest first.  *directory* itself is kept.
        """
        entries = self.ops.discover([join_pattern(directory, "**", "*")], include_hidden=True)
        files = [e.path for e in entries if e.is_file]
        dirs = [e.path for e in entries if e.is_dir]
        deleted, freed = self.ops.delete_files(files, check_age=False)
        deleted += self.ops.remove_empty_directories(dirs)
        return TrashOutcome(deleted, freed)


class RecycleBinLayout(TrashLayout):
    """Windows ``$Recycle.Bin``: one opaque folder per user SID."""

    def empty_root(self, root: str) -> TrashOutcome:
        outcome = TrashOutcome()
        for user_folder in self.ops.find_directories([join_pattern(root, "S-*")], include_hidden=True):
            outcome.add(self.purge_tree(user_folder))
        return outcome


class FlatTrashLayout(TrashLayout):
    """macOS ``~/.Trash`` and per-volume ``.Trashes``."""

    def empty_root(self, root: str) -> TrashOutcome:
        return self.purge_tree(root)


class XdgTrashLayout(TrashLayout):
    """Freedesktop trash: ``files/`` holds content, ``info/`` sidecars.

    Sidecars are removed independently of their content entries.
    """

    def empty_root(self, root: str) -> TrashOutcome:
        outcome = TrashOutcome()

        files_dir = os.path.join(root, "files")
        if os.path.isdir(files_dir):
            outcome.add(self.purge_tree(files_dir))

        info_dir = os.path.join(root, "info")
        if os.path.isdir(info_dir):
            sidecars = self.ops.find_files([join_pattern(info_dir, "*.trashinfo")], include_hidden=True)
            deleted, freed = self.ops.delete_files(sidecars, check_age=False)
            outcome.add(TrashOutcome(deleted, freed))

        return outcome


_LAYOUTS: dict[Platform, type[TrashLayout]] = {
    Platform.WINDOWS: RecycleBinLayout,
    Platform.MACOS: FlatTrashLayout,
    Platform.LINUX: XdgTrashLayout,
}


def layout_for(platform: Platform | str, ops: FileOps) -> TrashLayout:
    """Return the trash strategy for *platform* (linux for unknown ones)."""
    try:
        cls = _LAYOUTS[Platform(platform)]
    except ValueError:
        cls = XdgTrashLayout
    return cls(ops)
