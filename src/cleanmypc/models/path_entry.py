"""Discovered filesystem entry."""

from __future__ import annotations

from dataclasses import dataclass

FILE = "file"
DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class PathEntry:
    """Absolute path found by discovery.

    ``size`` is cached for regular files at discovery time and left as
    None for directories, whose size is only computed when they are
    about to be removed.
    """

    path: str
    kind: str
    size: int | None = None

    @property
    def is_file(self) -> bool:
        return self.kind == FILE

    @property
    def is_dir(self) -> bool:
        return self.kind == DIRECTORY
