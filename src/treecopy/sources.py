"""Copy sources: things that know how to place themselves under a root.

Each source is consumed by one :meth:`CopySource.copy_to` call.  The
file-like sources (:class:`FileSource`, :class:`DataSource`,
:class:`ReaderSource`) write a single file at their destination and, if
given a :class:`~treecopy.FileInfo`, apply its mtime and mode
afterwards.  :class:`DirSource` walks a directory and copies every
accepted regular file.
"""

from __future__ import annotations

import abc
import logging
import os
import stat
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, Sequence

from ._copy import copy_file
from ._io import copy_bytes, copy_reader, set_info
from ._paths import mkdir_all_if_not_exists, resolve_mode
from ._types import FileInfo
from .exceptions import DirectoryCreateError

logger = logging.getLogger(__name__)

IgnoreFunc = Callable[[str], bool]


def _under(root: str | os.PathLike, fragment: str) -> str:
    """Join *fragment* below *root*; a leading separator does not escape it."""
    fragment = fragment.lstrip("/" + os.sep)
    return os.path.join(os.fspath(root), fragment) if fragment else os.fspath(root)


@dataclass(frozen=True)
class Destination:
    """A path fragment relative to a copy root.

    Attributes:
        path: Relative location (``""`` means the root itself).
    """
    path: str = ""

    def resolve(self, root: str | os.PathLike) -> str:
        """Join to *root*, creating the parent directory if it is missing.

        The parent inherits the mode of its nearest existing ancestor.
        """
        full = _under(root, self.path)
        parent = os.path.dirname(full)
        if parent:
            mkdir_all_if_not_exists(parent)
        return full


class CopySource(abc.ABC):
    """Something that can copy itself under a destination root."""

    @abc.abstractmethod
    def copy_to(self, root: str | os.PathLike) -> None:
        """Materialize this source under *root*."""


def _apply_info(path: str, info: FileInfo | None) -> None:
    if info is not None:
        set_info(path, info)


@dataclass
class FileSource(CopySource):
    """An existing regular file.

    Attributes:
        src: Path to the file.
        dest: Destination relative to the root; defaults to the
            basename of *src*.
        info: Optional descriptor applied after the copy.
    """
    src: str
    dest: str = ""
    info: FileInfo | None = None

    def copy_to(self, root: str | os.PathLike) -> None:
        dest = self.dest or os.path.basename(os.path.normpath(self.src))
        path = Destination(dest).resolve(root)
        copy_file(self.src, path)
        _apply_info(path, self.info)


@dataclass
class DataSource(CopySource):
    """An in-memory byte buffer written to *dest*."""
    data: bytes
    dest: str
    info: FileInfo | None = None

    def copy_to(self, root: str | os.PathLike) -> None:
        path = Destination(self.dest).resolve(root)
        copy_bytes(self.data, path)
        _apply_info(path, self.info)


@dataclass
class ReaderSource(CopySource):
    """A binary reader drained into *dest*.

    The reader is not closed; it belongs to the caller.
    """
    reader: BinaryIO
    dest: str
    info: FileInfo | None = None

    def copy_to(self, root: str | os.PathLike) -> None:
        path = Destination(self.dest).resolve(root)
        copy_reader(self.reader, path)
        _apply_info(path, self.info)


@dataclass
class DirSource(CopySource):
    """A directory copied recursively.

    Attributes:
        src: Directory to copy.
        dest: Destination directory relative to the root (``""`` pours
            the contents straight into the root).
        ignore: Predicates called with each entry's path relative to
            *src* (forward slashes).  If any returns true the entry is
            skipped, and an ignored directory is not descended.

    Only directories and regular files are copied.  Symlinks, devices,
    sockets and FIFOs are skipped without error.
    """
    src: str
    dest: str = ""
    ignore: Sequence[IgnoreFunc] = field(default_factory=list)

    def _accept(self, rel_path: str) -> bool:
        for f in self.ignore:
            if f(rel_path):
                return False
        return True

    def copy_to(self, root: str | os.PathLike) -> None:
        src = os.fspath(self.src)
        st = os.stat(src)
        if not stat.S_ISDIR(st.st_mode):
            raise NotADirectoryError(f"not a directory: {src!r}")
        dir_mode = resolve_mode(src)
        base = _under(root, self.dest)

        for dirpath, dirnames, filenames in os.walk(src, onerror=_raise):
            rel_dir = os.path.relpath(dirpath, src).replace(os.sep, "/")
            if rel_dir == ".":
                rel_dir = ""
            target = os.path.join(base, rel_dir) if rel_dir else base
            try:
                mkdir_all_if_not_exists(target, dir_mode)
            except OSError as exc:
                raise DirectoryCreateError(target, exc) from exc

            keep = []
            for name in dirnames:
                if os.path.islink(os.path.join(dirpath, name)):
                    logger.debug("skip symlink %s", os.path.join(dirpath, name))
                    continue
                if self._accept(_join(rel_dir, name)):
                    keep.append(name)
            dirnames[:] = keep

            for name in filenames:
                rel = _join(rel_dir, name)
                if not self._accept(rel):
                    continue
                full = os.path.join(dirpath, name)
                if not stat.S_ISREG(os.lstat(full).st_mode):
                    logger.debug("skip non-regular %s", full)
                    continue
                copy_file(full, os.path.join(target, name))


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def _raise(exc: OSError) -> None:
    raise exc
