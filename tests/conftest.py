"""Shared fixtures for treecopy tests."""

import os

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def umask():
    """Return the process umask without changing it."""
    old = os.umask(0o022)
    os.umask(old)
    return old


@pytest.fixture
def src_tree(tmp_path):
    """A small source tree.

    Tree:
        readme.txt, .hidden,
        src/main.py, src/util.pyc, src/sub/deep.txt,
        build/out.bin, empty/
    """
    root = tmp_path / "srctree"
    root.mkdir()
    (root / "readme.txt").write_text("readme")
    (root / ".hidden").write_text("hidden")

    src = root / "src"
    src.mkdir()
    (src / "main.py").write_text("main")
    (src / "util.pyc").write_bytes(b"\x00pyc")
    sub = src / "sub"
    sub.mkdir()
    (sub / "deep.txt").write_text("deep")

    build = root / "build"
    build.mkdir()
    (build / "out.bin").write_bytes(b"\x01\x02\x03")

    (root / "empty").mkdir()
    return root


@pytest.fixture
def listing():
    """Return a helper listing a tree."""
    return _tree_listing


def _tree_listing(root):
    """Return ({relative file paths}, {relative dir paths}) under *root*."""
    files, dirs = set(), set()
    for dirpath, dirnames, filenames in os.walk(root):
        rel = os.path.relpath(dirpath, root).replace(os.sep, "/")
        prefix = "" if rel == "." else rel + "/"
        for d in dirnames:
            dirs.add(prefix + d)
        for f in filenames:
            files.add(prefix + f)
    return files, dirs
