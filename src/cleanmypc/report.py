"""Cleanup report writers."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from cleanmypc.models.task_result import RunSummary, TaskResult
from cleanmypc.utils import bytes_to_human

log = logging.getLogger(__name__)

_RULE = "=" * 60
_SUBRULE = "-" * 30


def build_json_report(results: Iterable[TaskResult], now: datetime | None = None) -> dict[str, Any]:
    """Build the structured report document."""
    results = list(results)
    now = now or datetime.now(timezone.utc)
    return {
        "timestamp": now.isoformat(),
        "summary": RunSummary.from_results(results).to_dict(),
        "results": [r.to_dict() for r in results],
    }


def render_text_report(results: Iterable[TaskResult], now: datetime | None = None) -> str:
    """Render the plain-text report."""
    results = list(results)
    now = now or datetime.now()
    summary = RunSummary.from_results(results)

    lines = [
        _RULE,
        "CleanMyPC - Cleanup Report",
        _RULE,
        f"Generated: {now.strftime('%Y-%m-%d %H:%M:%S')}",
        "",
        "SUMMARY:",
        _SUBRULE,
        f"Total files cleaned: {summary.total_files}",
        f"Total space freed: {bytes_to_human(summary.total_space)}",
        f"Total files organized: {summary.total_organized}",
        f"Total errors: {summary.total_errors}",
        "",
        "DETAILED RESULTS:",
        _SUBRULE,
    ]

    for result in results:
        lines.append("")
        lines.append(f"{result.task.upper()}:")
        lines.append(f"  Files deleted: {result.files_deleted}")
        lines.append(f"  Space saved: {bytes_to_human(result.space_saved)}")
        if result.files_organized is not None:
            lines.append(f"  Files organized: {result.files_organized}")
        if result.large_files:
            lines.append(f"  Large files found: {len(result.large_files)}")
            lines.extend(f"    - {f.path} ({bytes_to_human(f.size)})" for f in result.large_files)
        if result.errors:
            lines.append(f"  Errors ({len(result.errors)}):")
            lines.extend(f"    - {e}" for e in result.errors)

    return "\n".join(lines) + "\n"


def write_report(results: Iterable[TaskResult], path: Path) -> None:
    """Write a report to *path*: JSON for a ``.json`` suffix, text otherwise."""
    results = list(results)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(build_json_report(results), indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(render_text_report(results), encoding="utf-8")
    log.info("Report saved to %s", path)
