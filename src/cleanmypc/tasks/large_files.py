"""Task to report large files below a set of seed directories."""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from cleanmypc.core.discovery import is_excluded
from cleanmypc.core.fileops import FileOps
from cleanmypc.models.task import CleanupTask
from cleanmypc.models.task_result import LargeFile, TaskResult
from cleanmypc.platforms import SYSTEM_DIR_NAMES, Category, HostEnvironment, resolve_paths, skip_roots
from cleanmypc.utils import is_hidden

log = logging.getLogger(__name__)

MAX_DEPTH = 10


class LargeFileScanner:
    """Bounded depth-first search for files at or above *threshold* bytes.

    Only the given seed directories are walked, each to at most
    ``MAX_DEPTH`` levels of nested directories; this is not a full
    filesystem scan.  Hidden entries, well-known system directory names,
    system roots and excluded paths are skipped, symlinks are not
    followed, and unreadable directories are passed over silently.
    """

    def __init__(
        self,
        threshold: int,
        *,
        exclusions: Iterable[str] = (),
        system_roots: Iterable[str] = (),
        case_insensitive: bool = False,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self.threshold = threshold
        self.exclusions = tuple(exclusions)
        self.case_insensitive = case_insensitive
        self.system_roots = tuple(self._fold(os.path.normpath(r)) for r in system_roots)
        self.max_depth = max_depth

    @classmethod
    def for_host(cls, host: HostEnvironment, threshold: int, exclusions: Iterable[str] = ()) -> LargeFileScanner:
        roots, case_insensitive = skip_roots(host)
        return cls(threshold, exclusions=exclusions, system_roots=roots, case_insensitive=case_insensitive)

    def scan(self, seeds: Iterable[str], errors: list[str] | None = None) -> list[LargeFile]:
        """Scan *seeds* concurrently; return findings largest first.

        A file reachable from several seeds is reported once.
        """
        seeds = [s for s in seeds if os.path.isdir(s)]
        if not seeds:
            return []

        lock = threading.Lock()
        found: dict[str, int] = {}

        def _scan_seed(seed: str) -> None:
            try:
                hits = self.scan_seed(seed)
            except Exception as e:
                log.exception("Large file search failed in %s", seed)
                if errors is not None:
                    with lock:
                        errors.append(f"Error searching in {seed}: {e}")
                return
            with lock:
                for path, size in hits:
                    found.setdefault(path, size)

        max_workers = min(4, len(seeds))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(_scan_seed, seed) for seed in seeds]
            for future in futures:
                future.result()

        return [LargeFile(p, s) for p, s in sorted(found.items(), key=lambda item: (-item[1], item[0]))]

    def scan_seed(self, seed: str) -> list[tuple[str, int]]:
        """Walk one seed directory with an explicit stack."""
        hits: list[tuple[str, int]] = []
        stack: list[tuple[str, int]] = [(os.path.abspath(seed), 0)]
        while stack:
            directory, depth = stack.pop()
            if depth > self.max_depth:
                continue
            try:
                with os.scandir(directory) as it:
                    entries = list(it)
            except OSError:
                log.debug("Cannot read directory: %s", directory)
                continue

            for entry in entries:
                if self.should_skip(entry.path, entry.name):
                    continue
                try:
                    if entry.is_file(follow_symlinks=False):
                        size = entry.stat(follow_symlinks=False).st_size
                        if size >= self.threshold:
                            hits.append((entry.path, size))
                    elif entry.is_dir(follow_symlinks=False):
                        stack.append((entry.path, depth + 1))
                except OSError:
                    log.debug("Cannot access: %s", entry.path)
        return hits

    def should_skip(self, path: str, name: str) -> bool:
        if is_hidden(name) or name in SYSTEM_DIR_NAMES:
            return True
        folded = self._fold(os.path.normpath(path))
        if any(folded == root or folded.startswith(root.rstrip(os.sep) + os.sep) for root in self.system_roots):
            return True
        return is_excluded(path, self.exclusions)

    def _fold(self, path: str) -> str:
        return path.lower() if self.case_insensitive else path


class LargeFilesTask(CleanupTask):
    """Reports files at or above the configured size threshold.

    Nothing is deleted by ``run()``; ``delete_large_files`` removes
    findings the user picked afterwards.
    """

    @property
    def id(self) -> str:
        return "large_files"

    @property
    def name(self) -> str:
        return "Large Files"

    @property
    def description(self) -> str:
        return "Lists files above the size threshold in the home folder and other common locations."

    def run(self) -> TaskResult:
        errors: list[str] = []
        scanner = LargeFileScanner.for_host(self.host, self.config.large_file_threshold, self.config.exclusions)
        seeds = resolve_paths(Category.LARGE_FILE_SEEDS, self.host, self.config)
        large_files = scanner.scan(seeds, errors)
        log.info("Found %d files of at least %d bytes", len(large_files), self.config.large_file_threshold)
        return TaskResult(task=self.id, large_files=large_files, errors=errors)

    def delete_large_files(self, paths: Iterable[str]) -> TaskResult:
        """Delete the given findings, honouring dry run."""
        ops = FileOps(self.context)
        deleted, freed = ops.delete_files(
            (p for p in paths if not is_excluded(p, self.config.exclusions)),
            check_age=False,
        )
        return TaskResult(task=self.id, files_deleted=deleted, space_saved=freed, errors=ops.errors)
