"""Exceptions for treecopy."""

from __future__ import annotations

import stat


class TreeCopyError(Exception):
    """Base class for errors raised by treecopy itself.

    Plain filesystem failures (missing files, permissions, failed
    ``link``/``chmod``/``utime`` calls) propagate as the builtin
    :class:`OSError` subclasses and are not wrapped.
    """


class NonRegularFileError(TreeCopyError, OSError):
    """Raised when a plain-file operation meets a directory, symlink or device.

    Attributes:
        path: Name of the offending entry.
        mode: Its ``st_mode``.
        role: ``"source"`` or ``"destination"``.
    """

    def __init__(self, path: str, mode: int, role: str = "source") -> None:
        super().__init__(
            f"non-regular {role} file {path} ({stat.filemode(mode)!r})"
        )
        self.path = path
        self.mode = mode
        self.role = role


class DirectoryCreateError(TreeCopyError, OSError):
    """Raised when a destination directory cannot be created during a walk."""

    def __init__(self, path: str, cause: OSError) -> None:
        super().__init__(f"mkdir {path!r}: {cause.strerror or cause}")
        self.path = path
        self.errno = cause.errno


class SourceError(TreeCopyError):
    """Raised by :func:`~treecopy.copy_tree` when one of its sources fails.

    The underlying error is available as ``__cause__``.

    Attributes:
        index: Zero-based position of the failing source.
        source: The failing source object.
    """

    def __init__(self, index: int, source: object, cause: BaseException) -> None:
        super().__init__(f"source #{index}: {cause}")
        self.index = index
        self.source = source
