"""Tests for downloads organization."""

from __future__ import annotations

import pytest

from cleanmypc.tasks.downloads import DownloadsTask, unique_name

from conftest import snapshot

CATEGORIES = (("Images", (".jpg",)), ("Documents", (".pdf",)))


@pytest.fixture
def downloads(tmp_path):
    path = tmp_path / "Downloads"
    path.mkdir()
    return path


def _organize(make_context, downloads, **overrides):
    overrides.setdefault("categories", CATEGORIES)
    context = make_context(downloads_path=str(downloads), **overrides)
    return DownloadsTask(context).run()


def _tree(base):
    return sorted(str(p.relative_to(base)) for p in base.rglob("*"))


class TestDownloads:
    def test_files_sorted_by_extension(self, downloads, make_file, make_context):
        make_file(downloads / "photo.jpg")
        make_file(downloads / "report.pdf")
        make_file(downloads / "note")

        result = _organize(make_context, downloads)

        assert result.files_organized == 2
        assert result.errors == []
        assert (downloads / "Images" / "photo.jpg").exists()
        assert (downloads / "Documents" / "report.pdf").exists()
        assert (downloads / "note").exists()

    def test_existing_target_gets_numbered_name(self, downloads, make_file, make_context):
        make_file(downloads / "Images" / "photo.jpg", size=1)
        make_file(downloads / "photo.jpg", size=2)

        _organize(make_context, downloads)

        assert (downloads / "Images" / "photo.jpg").stat().st_size == 1
        assert (downloads / "Images" / "photo (1).jpg").stat().st_size == 2

    def test_extension_match_is_case_insensitive(self, downloads, make_file, make_context):
        make_file(downloads / "SCAN.PDF")
        assert _organize(make_context, downloads).files_organized == 1
        assert (downloads / "Documents" / "SCAN.PDF").exists()

    def test_unknown_hidden_and_nested_files_stay(self, downloads, make_file, make_context):
        make_file(downloads / "song.mp3")
        make_file(downloads / ".secret.jpg")
        make_file(downloads / "folder" / "inner.jpg")

        result = _organize(make_context, downloads)

        assert result.files_organized == 0
        assert not (downloads / "Images").exists()
        assert (downloads / "folder" / "inner.jpg").exists()

    def test_excluded_file_is_not_moved(self, downloads, make_file, make_context):
        make_file(downloads / "private-photo.jpg")
        make_file(downloads / "photo.jpg")

        result = _organize(make_context, downloads, exclusions=("private",))

        assert result.files_organized == 1
        assert (downloads / "private-photo.jpg").exists()

    def test_dry_run_moves_nothing(self, downloads, make_file, make_context):
        make_file(downloads / "photo.jpg")
        make_file(downloads / "report.pdf")
        before = snapshot(downloads)

        result = _organize(make_context, downloads, dry_run=True)

        assert result.files_organized == 2
        assert snapshot(downloads) == before

    def test_repeated_runs_are_deterministic(self, tmp_path, make_file, make_context):
        names = ["b.jpg", "a.pdf", "c.jpg", "notes.txt"]
        trees = []
        for run in ("first", "second"):
            base = tmp_path / run / "Downloads"
            make_file(base / "Images" / "c.jpg")
            for name in names:
                make_file(base / name)
            _organize(make_context, base)
            trees.append(_tree(base))

        assert trees[0] == trees[1]
        assert "Images/c (1).jpg" in trees[0]

    def test_disabled(self, downloads, make_file, make_context):
        make_file(downloads / "photo.jpg")

        result = _organize(make_context, downloads, organize_downloads=False)

        assert result.files_organized == 0
        assert result.errors == ["Downloads organization is disabled in config"]
        assert (downloads / "photo.jpg").exists()

    @pytest.mark.parametrize("dry_run", [True, False])
    def test_category_name_taken_by_file(self, downloads, make_file, make_context, dry_run):
        make_file(downloads / "Images")
        make_file(downloads / "photo.jpg")

        result = _organize(make_context, downloads, dry_run=dry_run)

        assert result.files_organized == 0
        assert len(result.errors) == 1
        assert "not a directory" in result.errors[0]
        assert (downloads / "photo.jpg").exists()

    def test_missing_folder(self, tmp_path, make_context):
        result = _organize(make_context, tmp_path / "nope")
        assert result.files_organized == 0
        assert result.errors and "Downloads folder not found" in result.errors[0]


class TestUniqueName:
    def test_free_name_is_kept(self, tmp_path):
        assert unique_name(str(tmp_path), "a.txt") == "a.txt"

    def test_counter_skips_taken_names(self, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "a (1).txt").write_text("x")
        assert unique_name(str(tmp_path), "a.txt") == "a (2).txt"
        assert unique_name(str(tmp_path), "a.txt", {"a (2).txt"}) == "a (3).txt"

    def test_name_without_extension(self, tmp_path):
        (tmp_path / "README").write_text("x")
        assert unique_name(str(tmp_path), "README") == "README (1)"
