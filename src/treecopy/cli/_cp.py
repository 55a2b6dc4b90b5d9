"""The cp command."""

from __future__ import annotations

import os

import click

from .._exclude import ExcludeFilter
from ..sources import CopySource, DirSource, FileSource
from ..tree import copy_tree
from ._helpers import main, _report_errors, _status


def _build_sources(raw_sources, *, exclude, exclude_from, gitignore) -> list[CopySource]:
    """Turn command-line paths into copy sources.

    Directories keep their name under DEST unless given with a trailing
    '/', in which case their contents land directly in DEST.
    """
    sources: list[CopySource] = []
    for raw in raw_sources:
        if not os.path.exists(raw):
            raise click.ClickException(f"No such file or directory: {raw}")
        if os.path.isdir(raw):
            contents = raw.endswith(("/", os.sep))
            name = "" if contents else os.path.basename(os.path.normpath(raw))
            ignore = []
            if exclude or exclude_from or gitignore:
                ignore.append(ExcludeFilter(
                    patterns=exclude, exclude_from=exclude_from,
                    root=raw, gitignore=gitignore,
                ))
            sources.append(DirSource(raw, name, ignore))
        else:
            sources.append(FileSource(raw))
    return sources


@main.command()
@click.argument("args", nargs=-1, required=True)
@click.option("--exclude", multiple=True,
              help="Exclude files matching pattern (gitignore syntax, repeatable).")
@click.option("--exclude-from", "exclude_from", type=click.Path(exists=True),
              envvar="TREECOPY_EXCLUDE_FROM",
              help="Read exclude patterns from file (or set TREECOPY_EXCLUDE_FROM).")
@click.option("--gitignore", is_flag=True, default=False,
              help="Honor .gitignore files inside copied directories.")
@click.pass_context
def cp(ctx, args, exclude, exclude_from, gitignore):
    """Copy files and directories into DEST.

    The last argument is the destination directory (created if missing);
    all preceding arguments are sources.  Directories are copied
    recursively with their name preserved.  A trailing '/' on a source
    directory means "contents of".

    \b
    Examples:
        treecopy cp a.txt b.txt out/        # out/a.txt, out/b.txt
        treecopy cp src out/                # out/src/...
        treecopy cp src/ out/               # out/...
    """
    if len(args) < 2:
        raise click.ClickException("cp requires at least two arguments (SRC... DEST)")

    dest = args[-1]
    sources = _build_sources(args[:-1], exclude=exclude,
                             exclude_from=exclude_from, gitignore=gitignore)
    with _report_errors():
        copy_tree(dest, sources)
    _status(ctx, f"Copied {len(sources)} source(s) to {dest}")
