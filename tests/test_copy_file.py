"""Tests for copy_file (hardlink fast path and content fallback)."""

import errno
import os
import stat

import pytest

from treecopy import CopyMethod, NonRegularFileError, copy_file


@pytest.fixture
def src_file(tmp_path):
    p = tmp_path / "src.txt"
    p.write_bytes(b"source content")
    os.chmod(p, 0o640)
    os.utime(p, (1_500_000_000, 1_500_000_000))
    return p


@pytest.fixture
def no_link(monkeypatch):
    """Make os.link fail as it does across devices."""
    def fail(src, dst, *args, **kwargs):
        raise OSError(errno.EXDEV, "Invalid cross-device link", src)
    monkeypatch.setattr(os, "link", fail)


class TestHardLink:
    def test_same_inode(self, tmp_path, src_file):
        dst = tmp_path / "dst.txt"
        assert copy_file(src_file, dst) == CopyMethod.LINK
        assert os.stat(dst).st_ino == os.stat(src_file).st_ino
        assert os.stat(src_file).st_nlink == 2

    def test_accepts_str_paths(self, tmp_path, src_file):
        dst = str(tmp_path / "dst.txt")
        copy_file(str(src_file), dst)
        assert open(dst, "rb").read() == b"source content"


class TestContentFallback:
    def test_cross_device_copies_content(self, tmp_path, src_file, no_link):
        dst = tmp_path / "dst.txt"
        assert copy_file(src_file, dst) == CopyMethod.COPY
        assert dst.read_bytes() == b"source content"
        assert os.stat(dst).st_ino != os.stat(src_file).st_ino

    def test_propagates_metadata(self, tmp_path, src_file, no_link):
        dst = tmp_path / "dst.txt"
        copy_file(src_file, dst)
        s, d = os.stat(src_file), os.stat(dst)
        assert d.st_mtime_ns == s.st_mtime_ns
        assert stat.S_IMODE(d.st_mode) == stat.S_IMODE(s.st_mode) == 0o640

    def test_existing_destination_replaced(self, tmp_path, src_file):
        dst = tmp_path / "dst.txt"
        dst.write_bytes(b"stale data that is longer than the source")
        # link fails with EEXIST, so the contents are copied over
        assert copy_file(src_file, dst) == CopyMethod.COPY
        assert dst.read_bytes() == b"source content"
        assert os.stat(dst).st_mtime_ns == os.stat(src_file).st_mtime_ns


class TestSameFile:
    def test_same_path(self, src_file):
        assert copy_file(src_file, src_file) == CopyMethod.SAME
        assert src_file.read_bytes() == b"source content"

    def test_existing_hardlink(self, tmp_path, src_file):
        dst = tmp_path / "linked.txt"
        os.link(src_file, dst)
        assert copy_file(src_file, dst) == CopyMethod.SAME
        assert dst.read_bytes() == b"source content"


class TestRejections:
    def test_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            copy_file(tmp_path / "nope", tmp_path / "dst")

    def test_directory_source(self, tmp_path):
        d = tmp_path / "dir"
        d.mkdir()
        with pytest.raises(NonRegularFileError) as exc_info:
            copy_file(d, tmp_path / "dst")
        assert exc_info.value.role == "source"
        assert "dir" in str(exc_info.value)
        assert not (tmp_path / "dst").exists()

    def test_directory_destination(self, tmp_path, src_file):
        d = tmp_path / "dir"
        d.mkdir()
        (d / "inner.txt").write_text("untouched")
        with pytest.raises(NonRegularFileError) as exc_info:
            copy_file(src_file, d)
        assert exc_info.value.role == "destination"
        assert os.listdir(d) == ["inner.txt"]
        assert (d / "inner.txt").read_text() == "untouched"

    def test_non_regular_error_is_oserror(self, tmp_path):
        d = tmp_path / "dir"
        d.mkdir()
        with pytest.raises(OSError):
            copy_file(d, tmp_path / "dst")
