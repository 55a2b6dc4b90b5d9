"""Single-file copy with a hardlink fast path."""

from __future__ import annotations

import logging
import os

from ._io import _check_destination, copy_file_contents, set_info
from ._types import CopyMethod, FileInfo
from .exceptions import NonRegularFileError

logger = logging.getLogger(__name__)


def copy_file(src: str | os.PathLike, dst: str | os.PathLike) -> CopyMethod:
    """Copy the regular file *src* to *dst*.

    If *dst* already exists and is the same file as *src*, nothing
    happens.  Otherwise a hard link is attempted; when linking fails for
    any reason (different device, unsupported filesystem, permissions)
    the contents are copied and *src*'s mtime and mode are applied to
    *dst*.

    A linked destination shares its metadata with *src*, so no
    propagation is done in that case.

    Returns:
        The :class:`CopyMethod` that was used.

    Raises:
        FileNotFoundError: *src* does not exist.
        NonRegularFileError: *src*, or an existing *dst*, is not a
            regular file.
    """
    info = FileInfo.from_path(src)
    if not info.is_regular:
        raise NonRegularFileError(info.name, info.mode, "source")
    if _check_destination(info, dst):
        return CopyMethod.SAME

    try:
        os.link(src, dst)
    except OSError as exc:
        logger.debug("link %s -> %s failed (%s), copying contents", src, dst, exc)
    else:
        return CopyMethod.LINK

    copy_file_contents(src, dst)
    set_info(dst, info)
    return CopyMethod.COPY
