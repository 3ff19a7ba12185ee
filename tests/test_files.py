"""Tests for the filesystem helpers."""

import os
from datetime import timezone

import pytest
from PIL import Image

from photoblog import files
from photoblog.errors import FilesystemError, UnsupportedImageError
from tests.conftest import make_image


class TestListDir:
    def test_sorted_with_mod_times(self, tmp_path):
        make_image(tmp_path / "b.jpg", mtime=1_500_000_000)
        (tmp_path / "a").mkdir()

        entries = files.list_dir(tmp_path)

        assert [e.name for e in entries] == ["a", "b.jpg"]
        assert entries[0].is_dir and not entries[1].is_dir
        assert entries[1].mod_time.timestamp() == 1_500_000_000
        assert entries[1].mod_time.tzinfo is timezone.utc

    def test_dangling_symlink_is_listed(self, tmp_path):
        make_image(tmp_path / "a.jpg")
        os.symlink(tmp_path / "missing", tmp_path / "b")

        entries = files.list_dir(tmp_path)

        assert [e.name for e in entries] == ["a.jpg", "b"]
        assert not entries[1].is_dir

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FilesystemError):
            files.list_dir(tmp_path / "missing")


def test_has_extension():
    assert files.has_extension("IMG_1.JPG", (".jpg",))
    assert not files.has_extension("notes.txt", (".jpg",))
    assert not files.has_extension("jpg", (".jpg",))


class TestReadImage:
    def test_format_and_size(self, tmp_path):
        info = files.read_image(make_image(tmp_path / "p.gif", size=(7, 9)))
        assert (info.format, info.width, info.height) == ("GIF", 7, 9)

    def test_not_an_image(self, tmp_path):
        path = tmp_path / "fake.png"
        path.write_text("hello", encoding="utf-8")

        with pytest.raises(UnsupportedImageError):
            files.read_image(path)


class TestCopyOrResize:
    def test_plain_copy_without_limit(self, tmp_path):
        src = make_image(tmp_path / "src.png", size=(50, 40))

        files.copy_or_resize(src, tmp_path / "dst.png")

        assert (tmp_path / "dst.png").read_bytes() == src.read_bytes()

    def test_small_images_are_copied_unchanged(self, tmp_path):
        src = make_image(tmp_path / "src.jpg", size=(10, 10))

        files.copy_or_resize(src, tmp_path / "dst.jpg", max_size=64)

        assert (tmp_path / "dst.jpg").read_bytes() == src.read_bytes()

    def test_large_images_are_downsized(self, tmp_path):
        src = make_image(tmp_path / "src.png", size=(40, 80))

        files.copy_or_resize(src, tmp_path / "dst.png", max_size=20)

        with Image.open(tmp_path / "dst.png") as img:
            assert img.size == (10, 20)
            assert img.format == "PNG"


class TestCopy:
    def test_tree_merges_into_destination(self, tmp_path):
        (tmp_path / "static" / "js").mkdir(parents=True)
        (tmp_path / "static" / "js" / "app.js").write_text("//", encoding="utf-8")
        (tmp_path / "out" / "static").mkdir(parents=True)
        (tmp_path / "out" / "static" / "keep.txt").write_text("keep", encoding="utf-8")

        files.copy(tmp_path / "static", tmp_path / "out" / "static")

        assert (tmp_path / "out" / "static" / "js" / "app.js").is_file()
        assert (tmp_path / "out" / "static" / "keep.txt").is_file()

    def test_missing_source(self, tmp_path):
        with pytest.raises(FilesystemError):
            files.copy(tmp_path / "missing.css", tmp_path / "out.css")


def test_write_text_truncates(tmp_path):
    path = tmp_path / "index.html"
    path.write_text("a much longer previous version", encoding="utf-8")

    files.write_text(path, "new")

    assert path.read_text(encoding="utf-8") == "new"
