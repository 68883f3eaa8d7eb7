"""Shared utility functions."""

from __future__ import annotations

import glob
import logging
import os

log = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


def is_hidden(name: str) -> bool:
    """Check if a file or directory name marks a hidden entry."""
    return name.startswith(HIDDEN_PREFIX)


def has_wildcard(path: str) -> bool:
    return "*" in path


def to_pattern(path: str) -> str:
    """Convert a path to glob syntax with forward slashes."""
    return path.replace("\\", "/")


def join_pattern(base: str, *parts: str) -> str:
    """Join glob *parts* onto *base*.

    A base without wildcards is escaped so characters like ``[`` in real
    directory names are matched literally.
    """
    base = to_pattern(base)
    if not has_wildcard(base):
        base = glob.escape(base)
    return "/".join([base.rstrip("/"), *parts])


def dir_size(path: str | os.PathLike) -> int:
    """Total size of all regular files below *path*.

    Unreadable entries are skipped.  Symlinks are not followed.
    """
    total = 0
    stack: list[str | os.PathLike] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError:
                        pass
        except OSError:
            log.debug("Cannot read directory: %s", current)
    return total


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"
