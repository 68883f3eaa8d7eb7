"""Glob-driven file and directory discovery."""

from __future__ import annotations

import glob
import logging
import os
import re
import stat
from typing import Iterable

from cleanmypc.models.path_entry import DIRECTORY, FILE, PathEntry
from cleanmypc.utils import to_pattern

log = logging.getLogger(__name__)


def is_excluded(path: str, exclusions: Iterable[str]) -> bool:
    """Check if any exclusion substring occurs in *path*.

    Both the path and the exclusions are compared with forward slashes so
    a windows-style exclusion still matches.
    """
    normalized = to_pattern(path)
    return any(ex and to_pattern(ex) in normalized for ex in exclusions)


# glob.escape() wraps "*", "?" and "[" in brackets
_ESCAPED = re.compile(r"\[([*?\[])\]")


def _literal_base(pattern: str) -> str:
    """Absolute path of the leading segments of *pattern* without wildcards."""
    literal: list[str] = []
    for part in pattern.split("/"):
        if glob.has_magic(_ESCAPED.sub("", part)):
            break
        literal.append(_ESCAPED.sub(r"\1", part))
    base = "/".join(literal)
    if not base:
        base = "/" if pattern.startswith("/") else os.curdir
    return os.path.abspath(base)


def _crosses_symlink(path: str, base: str) -> bool:
    """Check if a directory between *base* and *path* is a symlink.

    glob follows linked directories while expanding ``*`` and ``**``;
    such matches lie outside the searched tree, and link loops repeat
    the same file under many names.
    """
    parent = os.path.dirname(path)
    if parent == base or not parent.startswith(base.rstrip(os.sep) + os.sep):
        return False
    current = base
    for part in os.path.relpath(parent, base).split(os.sep):
        current = os.path.join(current, part)
        if os.path.islink(current):
            return True
    return False


class Discovery:
    """Expands glob patterns into concrete filesystem entries.

    Patterns may contain ``*`` in any segment and ``**`` for recursion.
    Entries whose absolute path contains one of *exclusions* are dropped.
    Glob failures are recorded in *errors* and yield no entries.
    """

    def __init__(self, exclusions: Iterable[str] = (), errors: list[str] | None = None) -> None:
        self.exclusions = tuple(exclusions)
        self.errors = errors if errors is not None else []

    def discover(
        self,
        patterns: Iterable[str],
        excludes: Iterable[str] = (),
        *,
        include_hidden: bool = False,
    ) -> list[PathEntry]:
        """Return files and directories matching *patterns*, sorted by path."""
        patterns = list(patterns)
        exclusions = (*self.exclusions, *excludes)
        found: dict[str, PathEntry] = {}
        try:
            for pattern in patterns:
                pattern = to_pattern(pattern)
                base = _literal_base(pattern)
                for match in glob.iglob(pattern, recursive=True, include_hidden=include_hidden):
                    path = os.path.abspath(match)
                    if path in found or is_excluded(path, exclusions):
                        continue
                    if _crosses_symlink(path, base):
                        log.debug("Skipping match behind a symlink: %s", path)
                        continue
                    entry = self._entry(path)
                    if entry is not None:
                        found[path] = entry
        except (OSError, ValueError, re.error) as e:
            log.debug("Glob failed for %s: %s", patterns, e)
            self.errors.append(f"Failed to find files: {e}")
            return []
        return [found[p] for p in sorted(found)]

    def find_files(
        self,
        patterns: Iterable[str],
        excludes: Iterable[str] = (),
        *,
        include_hidden: bool = False,
    ) -> list[str]:
        """Absolute paths of regular files matching *patterns*."""
        return [e.path for e in self.discover(patterns, excludes, include_hidden=include_hidden) if e.is_file]

    def find_directories(
        self,
        patterns: Iterable[str],
        excludes: Iterable[str] = (),
        *,
        include_hidden: bool = False,
    ) -> list[str]:
        """Absolute paths of directories matching *patterns*."""
        return [e.path for e in self.discover(patterns, excludes, include_hidden=include_hidden) if e.is_dir]

    @staticmethod
    def _entry(path: str) -> PathEntry | None:
        """Classify *path*; symlinks and special files are never returned."""
        try:
            st = os.lstat(path)
        except OSError:
            log.debug("Cannot stat: %s", path)
            return None
        if stat.S_ISDIR(st.st_mode):
            return PathEntry(path=path, kind=DIRECTORY)
        if stat.S_ISREG(st.st_mode):
            return PathEntry(path=path, kind=FILE, size=st.st_size)
        return None
