"""Content writing and metadata propagation.

Every writer converges on :func:`copy_reader`: the destination is
created or truncated, the bytes are streamed in, and the handle is
closed before returning.  Nothing is staged through a temporary file,
so a failed copy can leave a partial destination behind.
"""

from __future__ import annotations

import io
import logging
import os
import shutil
import stat
import time
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from ._paths import mkdir_all_if_not_exists
from ._types import FileInfo, WriteMode
from .exceptions import NonRegularFileError

logger = logging.getLogger(__name__)

_COPY_CHUNK_SIZE = 65536


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

def set_info(path: str | os.PathLike, info: FileInfo) -> None:
    """Give *path* the modification time and permission bits of *info*.

    The access time is set to now.  Times are applied before the mode so
    that a read-only mode never blocks the ``utime`` call.
    """
    os.utime(path, ns=(time.time_ns(), info.mtime_ns))
    os.chmod(path, info.permissions)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

@contextmanager
def _closing(out: BinaryIO) -> Iterator[BinaryIO]:
    """Close *out* on exit, reporting a close failure only if nothing else failed."""
    try:
        yield out
    except BaseException:
        try:
            out.close()
        except OSError:
            # the error raised inside the block wins
            pass
        raise
    out.close()


def copy_reader(reader: BinaryIO, dst: str | os.PathLike, *,
                sync: bool = True) -> None:
    """Create or truncate *dst* and fill it with everything *reader* yields.

    *reader* is any binary file-like object with a ``read(n)`` method.
    When *sync* is true the data is flushed to storage before closing.
    """
    with _closing(open(dst, "wb")) as out:
        shutil.copyfileobj(reader, out, _COPY_CHUNK_SIZE)
        if sync:
            out.flush()
            os.fsync(out.fileno())


def copy_bytes(data: bytes, dst: str | os.PathLike) -> None:
    """Write *data* to *dst*, replacing any existing content."""
    copy_reader(io.BytesIO(data), dst)


def copy_file_contents(src: str | os.PathLike, dst: str | os.PathLike) -> None:
    """Copy the contents of the file *src* into *dst*.

    *dst* is created if missing, otherwise truncated first.
    """
    with open(src, "rb") as f:
        copy_reader(f, dst)


def _check_destination(info: FileInfo, dst: str | os.PathLike) -> bool:
    """Validate an existing *dst* against the source descriptor *info*.

    Returns ``True`` when both refer to the same file (nothing to do).
    Raises :class:`NonRegularFileError` when *dst* exists but is not a
    regular file.
    """
    try:
        st = os.stat(dst)
    except FileNotFoundError:
        return False
    if not stat.S_ISREG(st.st_mode):
        raise NonRegularFileError(os.path.basename(os.fspath(dst)),
                                  st.st_mode, "destination")
    return info.same_file(FileInfo.from_stat(os.path.basename(os.fspath(dst)), st))


def copy_reader_info(reader: BinaryIO, info: FileInfo,
                     dst: str | os.PathLike) -> None:
    """Copy *reader* to *dst* and then apply *info* to the result.

    *info* describes where the bytes came from: a non-regular
    descriptor is rejected, and if it names the same file as an
    existing *dst* the call does nothing.
    """
    if not info.is_regular:
        raise NonRegularFileError(info.name, info.mode, "source")
    if _check_destination(info, dst):
        return
    copy_reader(reader, dst)
    set_info(dst, info)


def create_file(filename: str | os.PathLike, reader: BinaryIO,
                info: FileInfo | None = None,
                opt: WriteMode = WriteMode.NONE) -> None:
    """Write everything from *reader* to *filename*.

    Missing parent directories are created.  An existing file is
    truncated before writing.

    Args:
        filename: Destination path.
        reader: Binary file-like source.
        info: Descriptor supplying permissions and times.  Required
            when *opt* includes ``SET_PERM`` or ``SET_TIMES``.
        opt: :class:`WriteMode` flags.  ``SET_PERM`` makes the file's
            permission bits exactly ``info.permissions`` (otherwise the
            default creation mode applies).  ``SET_TIMES`` sets atime
            and mtime to ``info.mtime_ns`` once the data is written.
            ``SYNC`` flushes to storage before closing.
    """
    if (opt.is_set_perm or opt.is_set_times) and info is None:
        raise ValueError("create_file: SET_PERM/SET_TIMES require a FileInfo")

    parent = os.path.dirname(os.path.abspath(filename))
    mkdir_all_if_not_exists(parent)

    if opt.is_set_perm:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
                     info.permissions)
        out = os.fdopen(fd, "wb")
    else:
        out = open(filename, "wb")

    with _closing(out):
        if opt.is_set_perm:
            # the creation mode is filtered by the umask and an existing
            # file keeps its old mode
            os.chmod(filename, info.permissions)
        shutil.copyfileobj(reader, out, _COPY_CHUNK_SIZE)
        out.flush()
        if opt.is_sync:
            os.fsync(out.fileno())

    if opt.is_set_times:
        os.utime(filename, ns=(info.mtime_ns, info.mtime_ns))
    logger.debug("created %s (%s)", filename, opt)


def create_file_sync(filename: str | os.PathLike, reader: BinaryIO,
                     info: FileInfo) -> None:
    """:func:`create_file` with both permissions and times applied."""
    create_file(filename, reader, info, WriteMode.ALL)
