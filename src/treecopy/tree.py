"""Copy a list of heterogeneous sources into one destination root."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from ._paths import is_existing_dir
from .exceptions import SourceError
from .sources import CopySource

logger = logging.getLogger(__name__)


def copy_tree(dest: str | os.PathLike, sources: Sequence[CopySource]) -> None:
    """Copy each of *sources* under *dest*, in order.

    *dest* is created (mode ``0o777`` before umask) if it is not already
    a directory.  The first failing source stops the run and is raised
    as :class:`~treecopy.SourceError` carrying its index; sources copied
    before it stay on disk and later ones are never attempted.
    """
    if not is_existing_dir(dest):
        os.makedirs(dest, 0o777, exist_ok=True)

    for i, source in enumerate(sources):
        logger.debug("source #%d: %r -> %s", i, source, dest)
        try:
            source.copy_to(dest)
        except Exception as exc:
            raise SourceError(i, source, exc) from exc
