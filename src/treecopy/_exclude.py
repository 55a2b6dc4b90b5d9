"""Gitignore-style ignore predicate for :class:`~treecopy.DirSource`.

Combines explicit patterns, an exclude-from file, and ``.gitignore``
files found under the source root into one callable that takes a
relative path and answers "exclude?".

Pattern syntax follows gitignore rules (implemented by
``dulwich.ignore.IgnoreFilter``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter


def _read_pattern_file(path: str | os.PathLike) -> list[bytes]:
    """Return the pattern lines of *path*, without blanks and ``#`` comments."""
    lines = (raw.strip() for raw in Path(path).read_bytes().splitlines())
    return [line for line in lines if line and not line.startswith(b"#")]


class ExcludeFilter:
    """Ignore predicate built from gitignore patterns.

    Args:
        patterns: Gitignore-style patterns.
        exclude_from: File with one pattern per line; blank lines and
            ``#`` comments are skipped.
        root: Source directory the relative paths are resolved against.
            Needed for directory-only patterns (``build/``) and for
            *gitignore*.  Without it every path is treated as a file.
        gitignore: Also honor ``.gitignore`` files under *root*.
    """

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | os.PathLike | None = None,
        root: str | os.PathLike | None = None,
        gitignore: bool = False,
    ) -> None:
        if gitignore and root is None:
            raise ValueError("ExcludeFilter: gitignore=True requires root")
        lines = [p.encode("utf-8") for p in patterns or ()]
        if exclude_from is not None:
            lines.extend(_read_pattern_file(exclude_from))
        self._patterns = IgnoreFilter(lines) if lines else None
        self._root = Path(root) if root is not None else None
        self._gitignore = gitignore
        # rel_dir -> parsed .gitignore of that directory, or None
        self._gitignores: dict[str, IgnoreFilter | None] = {}

    def __call__(self, rel_path: str) -> bool:
        rel_path = rel_path.strip("/")
        if not rel_path:
            return False
        is_dir = self._root is not None and (self._root / rel_path).is_dir()
        return self.is_excluded(rel_path, is_dir=is_dir)

    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check *rel_path* against the patterns and any ``.gitignore`` files."""
        if self._patterns is not None:
            if self._patterns.is_ignored(rel_path + "/" if is_dir else rel_path):
                return True
        if not self._gitignore:
            return False
        if not is_dir and rel_path.rsplit("/", 1)[-1] == ".gitignore":
            return True

        # Each .gitignore matches paths relative to its own directory;
        # the deepest one with an opinion decides.
        parts = rel_path.split("/")
        verdict = None
        for depth in range(len(parts)):
            rules = self._gitignore_at("/".join(parts[:depth]))
            if rules is None:
                continue
            sub = "/".join(parts[depth:])
            answer = rules.is_ignored(sub + "/" if is_dir else sub)
            if answer is not None:
                verdict = answer
        return verdict is True

    def _gitignore_at(self, rel_dir: str) -> IgnoreFilter | None:
        if rel_dir not in self._gitignores:
            gi = self._root.joinpath(rel_dir, ".gitignore")
            self._gitignores[rel_dir] = (
                IgnoreFilter.from_path(str(gi)) if gi.is_file() else None
            )
        return self._gitignores[rel_dir]
