"""Tests for navstack.core.utils.file_io."""

import os

import pytest

from navstack.core.exceptions import FileIOError
from navstack.core.utils.file_io import read_text, safe_write


class TestSafeWrite:
    def test_creates_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "sub", "file.txt")
        safe_write(path, "hello")
        with open(path) as f:
            assert f.read() == "hello"

    def test_creates_parent_dirs(self, tmp_dir):
        path = os.path.join(tmp_dir, "a", "b", "c.txt")
        safe_write(path, "nested")
        assert os.path.exists(path)

    def test_overwrites_and_leaves_no_temp_file(self, tmp_dir):
        path = os.path.join(tmp_dir, "file.txt")
        safe_write(path, "v1")
        safe_write(path, "v2")
        assert read_text(path) == "v2"
        assert os.listdir(tmp_dir) == ["file.txt"]

    def test_unwritable_target_raises(self, tmp_dir):
        blocker = os.path.join(tmp_dir, "blocker")
        safe_write(blocker, "a file, not a directory")
        with pytest.raises(FileIOError):
            safe_write(os.path.join(blocker, "child.txt"), "x")


class TestReadText:
    def test_missing_file(self, tmp_dir):
        assert read_text(os.path.join(tmp_dir, "nope.txt")) is None

    def test_unicode(self, tmp_dir):
        path = os.path.join(tmp_dir, "u.txt")
        safe_write(path, "导航")
        assert read_text(path) == "导航"
