"""Tests for report rendering."""

from __future__ import annotations

import json
from datetime import datetime

from cleanmypc.models.task_result import LargeFile, TaskResult
from cleanmypc.report import build_json_report, render_text_report, write_report

RESULTS = [
    TaskResult(task="temp", files_deleted=3, space_saved=2048),
    TaskResult(task="downloads", files_organized=2, errors=["Failed to organize file /d/x.jpg: denied"]),
    TaskResult(task="large_files", large_files=[LargeFile("/home/u/movie.mkv", 3 * 1024**3)]),
]


class TestJsonReport:
    def test_structure(self):
        report = build_json_report(RESULTS, now=datetime(2024, 5, 1, 12, 0, 0))
        assert report["timestamp"] == "2024-05-01T12:00:00"
        assert report["summary"] == {"totalFiles": 3, "totalSpace": 2048, "totalOrganized": 2, "totalErrors": 1}
        assert [r["task"] for r in report["results"]] == ["temp", "downloads", "large_files"]

    def test_optional_fields_only_where_set(self):
        temp, downloads, large = build_json_report(RESULTS)["results"]
        assert "filesOrganized" not in temp
        assert "largeFiles" not in temp
        assert downloads["filesOrganized"] == 2
        assert large["largeFiles"] == [{"path": "/home/u/movie.mkv", "size": 3 * 1024**3}]


class TestTextReport:
    def test_sections(self):
        text = render_text_report(RESULTS, now=datetime(2024, 5, 1, 12, 0, 0))
        assert text.startswith("=" * 60 + "\nCleanMyPC - Cleanup Report\n")
        assert "Generated: 2024-05-01 12:00:00" in text
        assert "Total files cleaned: 3" in text
        assert "Total space freed: 2.0 KB" in text
        assert "TEMP:" in text
        assert "LARGE_FILES:" in text
        assert "    - /home/u/movie.mkv (3.0 GB)" in text
        assert "  Errors (1):" in text


class TestWriteReport:
    def test_json_suffix_writes_json(self, tmp_path):
        path = tmp_path / "out" / "report.json"
        write_report(RESULTS, path)
        assert json.loads(path.read_text(encoding="utf-8"))["summary"]["totalFiles"] == 3

    def test_other_suffix_writes_text(self, tmp_path):
        path = tmp_path / "report.txt"
        write_report(RESULTS, path)
        assert "DETAILED RESULTS:" in path.read_text(encoding="utf-8")
