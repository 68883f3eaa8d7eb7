"""Task result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass(frozen=True, slots=True)
class LargeFile:
    """File at or above the large-file threshold."""

    path: str
    size: int


@dataclass(slots=True)
class TaskResult:
    """Outcome of a single cleanup task invocation."""

    task: str
    files_deleted: int = 0
    space_saved: int = 0
    files_organized: int | None = None
    large_files: list[LargeFile] | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise using the report field names."""
        data: dict[str, Any] = {
            "task": self.task,
            "filesDeleted": self.files_deleted,
            "spaceSaved": self.space_saved,
        }
        if self.files_organized is not None:
            data["filesOrganized"] = self.files_organized
        if self.large_files is not None:
            data["largeFiles"] = [{"path": f.path, "size": f.size} for f in self.large_files]
        data["errors"] = list(self.errors)
        return data


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Totals across all task results of a run."""

    total_files: int = 0
    total_space: int = 0
    total_organized: int = 0
    total_errors: int = 0

    @classmethod
    def from_results(cls, results: Iterable[TaskResult]) -> RunSummary:
        files = space = organized = errors = 0
        for r in results:
            files += r.files_deleted
            space += r.space_saved
            organized += r.files_organized or 0
            errors += len(r.errors)
        return cls(total_files=files, total_space=space, total_organized=organized, total_errors=errors)

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "totalSpace": self.total_space,
            "totalOrganized": self.total_organized,
            "totalErrors": self.total_errors,
        }
