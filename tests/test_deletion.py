"""Tests for the dry-run aware remover and FileOps helpers."""

from __future__ import annotations

import os

from cleanmypc.core.deletion import Remover
from cleanmypc.core.fileops import FileOps

from conftest import needs_non_root


class TestRemover:
    def test_delete_file_reports_size(self, tmp_path, make_file):
        path = make_file(tmp_path / "f.tmp", size=42)
        outcome = Remover().delete_file(str(path))
        assert outcome.deleted
        assert outcome.size == 42
        assert not path.exists()

    def test_dry_run_keeps_file(self, tmp_path, make_file):
        path = make_file(tmp_path / "f.tmp", size=42)
        outcome = Remover(dry_run=True).delete_file(str(path))
        assert outcome.deleted
        assert outcome.size == 42
        assert path.exists()

    def test_missing_file_is_reported(self, tmp_path):
        errors: list[str] = []
        path = str(tmp_path / "gone.tmp")
        outcome = Remover(errors=errors).delete_file(path)
        assert not outcome.deleted
        assert outcome.size == 0
        assert len(errors) == 1
        assert path in errors[0]

    @needs_non_root
    def test_read_only_file_is_reported(self, tmp_path, make_file):
        path = make_file(tmp_path / "ro.tmp")
        os.chmod(path, 0o444)
        errors: list[str] = []
        outcome = Remover(errors=errors).delete_file(str(path))
        assert not outcome.deleted
        assert path.exists()
        assert errors and str(path) in errors[0]

    def test_delete_directory_sums_contents(self, tmp_path, make_file):
        make_file(tmp_path / "d" / "a", size=10)
        make_file(tmp_path / "d" / "sub" / "b", size=20)
        outcome = Remover().delete_directory(str(tmp_path / "d"))
        assert outcome.deleted
        assert outcome.size == 30
        assert not (tmp_path / "d").exists()

    def test_delete_directory_on_file_fails(self, tmp_path, make_file):
        path = make_file(tmp_path / "plain")
        errors: list[str] = []
        assert not Remover(errors=errors).delete_directory(str(path)).deleted
        assert path.exists()
        assert "Failed to delete directory" in errors[0]

    def test_emptiness_projection_under_dry_run(self, tmp_path, make_file):
        path = make_file(tmp_path / "d" / "only.tmp")
        remover = Remover(dry_run=True)
        assert not remover.is_directory_empty(str(tmp_path / "d"))
        remover.delete_file(str(path))
        assert remover.is_directory_empty(str(tmp_path / "d"))
        assert path.exists()


class TestAgeFilter:
    def test_exact_boundary_is_not_old_enough(self, tmp_path, make_file, make_context):
        ops = FileOps(make_context(max_file_age=5))
        assert not ops.is_old_enough(str(make_file(tmp_path / "exact.tmp", age_days=5)))

    def test_one_day_older_is_old_enough(self, tmp_path, make_file, make_context):
        ops = FileOps(make_context(max_file_age=5))
        assert ops.is_old_enough(str(make_file(tmp_path / "older.tmp", age_days=6)))

    def test_zero_disables_filter(self, tmp_path, make_file, make_context):
        ops = FileOps(make_context(max_file_age=0))
        assert ops.is_old_enough(str(make_file(tmp_path / "new.tmp", age_days=-1)))

    def test_unreadable_file_never_qualifies(self, tmp_path, make_context):
        ops = FileOps(make_context(max_file_age=1))
        assert not ops.is_old_enough(str(tmp_path / "missing"))

    def test_delete_files_honours_age(self, tmp_path, make_file, make_context):
        ops = FileOps(make_context(max_file_age=5))
        old = make_file(tmp_path / "old.tmp", size=7, age_days=9)
        new = make_file(tmp_path / "new.tmp", size=5, age_days=1)
        assert ops.delete_files([str(old), str(new)]) == (1, 7)
        assert new.exists()
        assert ops.delete_files([str(new)], check_age=False) == (1, 5)


class TestRemoveEmptyDirectories:
    def test_nested_empty_directories_removed_deepest_first(self, tmp_path, make_context):
        (tmp_path / "a" / "b" / "c").mkdir(parents=True)
        ops = FileOps(make_context())
        dirs = [str(tmp_path / "a"), str(tmp_path / "a" / "b"), str(tmp_path / "a" / "b" / "c")]
        assert ops.remove_empty_directories(dirs) == 3
        assert not (tmp_path / "a").exists()

    def test_directory_with_file_is_kept(self, tmp_path, make_file, make_context):
        make_file(tmp_path / "a" / "keep.txt")
        (tmp_path / "a" / "empty").mkdir()
        ops = FileOps(make_context())
        assert ops.remove_empty_directories([str(tmp_path / "a"), str(tmp_path / "a" / "empty")]) == 1
        assert (tmp_path / "a" / "keep.txt").exists()
        assert ops.errors == []

    def test_dry_run_counts_match_live(self, tmp_path, make_file, make_context):
        for base in ("dry", "live"):
            make_file(tmp_path / base / "x" / "y" / "f.tmp", size=3)

        def _run(base: str, dry_run: bool) -> tuple[int, int]:
            ops = FileOps(make_context(dry_run=dry_run))
            deleted, freed = ops.delete_files([str(tmp_path / base / "x" / "y" / "f.tmp")])
            deleted += ops.remove_empty_directories([str(tmp_path / base / "x"), str(tmp_path / base / "x" / "y")])
            return deleted, freed

        assert _run("dry", True) == _run("live", False) == (3, 3)
        assert (tmp_path / "dry" / "x" / "y" / "f.tmp").exists()
        assert not (tmp_path / "live" / "x").exists()
