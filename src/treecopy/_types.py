"""Data structures shared by the copy and write helpers."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum, IntFlag


@dataclass(frozen=True)
class FileInfo:
    """Metadata for a filesystem entry, used as a propagation template.

    Attributes:
        name: Base name of the entry.
        mode: ``st_mode`` (type flags + permission bits).
        mtime_ns: Modification time in nanoseconds since the epoch.
        dev: Device number, ``0`` when unknown.
        ino: Inode number, ``0`` when unknown.
        size: Size in bytes, ``0`` when unknown.
    """
    name: str
    mode: int
    mtime_ns: int
    dev: int = 0
    ino: int = 0
    size: int = 0

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> FileInfo:
        """Create a FileInfo from an ``os.stat_result``."""
        return cls(
            name=name,
            mode=st.st_mode,
            mtime_ns=st.st_mtime_ns,
            dev=st.st_dev,
            ino=st.st_ino,
            size=st.st_size,
        )

    @classmethod
    def from_path(cls, path: str | os.PathLike) -> FileInfo:
        """Stat *path* (following symlinks) and return its FileInfo."""
        path = os.fspath(path)
        return cls.from_stat(os.path.basename(os.path.normpath(path)),
                             os.stat(path))

    @property
    def is_regular(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def permissions(self) -> int:
        """Permission bits only (``S_IMODE`` of :attr:`mode`)."""
        return stat.S_IMODE(self.mode)

    @property
    def mtime(self) -> float:
        return self.mtime_ns / 1e9

    @property
    def mode_string(self) -> str:
        """``ls -l`` style rendering, e.g. ``-rw-r--r--``."""
        return stat.filemode(self.mode)

    def same_file(self, other: FileInfo) -> bool:
        """True if both descriptors refer to the same device and inode."""
        if not self.ino or not other.ino:
            return False
        return self.dev == other.dev and self.ino == other.ino


class WriteMode(IntFlag):
    """Options for :func:`~treecopy.create_file`.

    Members: ``SET_PERM``, ``SET_TIMES``, ``SYNC``, and
    ``ALL`` (``SET_PERM | SET_TIMES``).
    """
    NONE = 0
    SET_PERM = 1
    SET_TIMES = 2
    SYNC = 4
    ALL = SET_PERM | SET_TIMES

    @property
    def is_set_perm(self) -> bool:
        return bool(self & WriteMode.SET_PERM)

    @property
    def is_set_times(self) -> bool:
        return bool(self & WriteMode.SET_TIMES)

    @property
    def is_sync(self) -> bool:
        return bool(self & WriteMode.SYNC)


class CopyMethod(str, Enum):
    """How :func:`~treecopy.copy_file` materialized the destination.

    Members: ``LINK``, ``COPY``, ``SAME``.
    """
    LINK = "link"
    COPY = "copy"
    SAME = "same"

    def __str__(self) -> str:          # noqa: D105
        return self.value
