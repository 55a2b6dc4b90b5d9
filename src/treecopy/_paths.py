"""Directory helpers: existence checks, mode resolution, on-demand creation."""

from __future__ import annotations

import logging
import os
import stat

logger = logging.getLogger(__name__)

_DEFAULT_DIR_MODE = 0o777


def is_existing_dir(path: str | os.PathLike) -> bool:
    """True if *path* exists and is a directory (symlinks followed)."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False


def resolve_mode(path: str | os.PathLike) -> int:
    """Return the permission bits of *path* or of its nearest existing ancestor.

    Walks up from *path* until an entry exists, so a directory that is
    about to be created can inherit the mode of the directory it will
    live under.
    """
    current = os.path.abspath(path)
    while True:
        try:
            return stat.S_IMODE(os.stat(current).st_mode)
        except (FileNotFoundError, NotADirectoryError):
            parent = os.path.dirname(current)
            if parent == current:
                return _DEFAULT_DIR_MODE
            current = parent


def mkdir_all_if_not_exists(path: str | os.PathLike,
                            mode: int | None = None) -> None:
    """Create *path* and its parents unless it is already a directory.

    When *mode* is ``None`` the mode of the nearest existing ancestor
    is used.
    """
    if is_existing_dir(path):
        return
    if mode is None:
        mode = resolve_mode(path)
    logger.debug("mkdir %s (mode %o)", path, mode)
    os.makedirs(path, mode, exist_ok=True)
