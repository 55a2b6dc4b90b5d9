"""The write command."""

from __future__ import annotations

import sys

import click

from .._io import create_file
from .._types import FileInfo, WriteMode
from ._helpers import main, _report_errors, _status


@main.command()
@click.argument("dest", type=click.Path(dir_okay=False))
@click.option("--reference", type=click.Path(exists=True, dir_okay=False),
              help="Take permissions and modification time from this file.")
@click.option("--no-perm", is_flag=True, default=False,
              help="Do not apply the reference file's permissions.")
@click.option("--no-times", is_flag=True, default=False,
              help="Do not apply the reference file's modification time.")
@click.option("--sync", is_flag=True, default=False,
              help="Flush the file to storage before closing.")
@click.pass_context
def write(ctx, dest, reference, no_perm, no_times, sync):
    """Write stdin to DEST, creating parent directories as needed.

    \b
    Examples:
        cat data | treecopy write out/data.bin
        cat data | treecopy write --reference orig.bin --sync out/data.bin
    """
    opt = WriteMode.NONE
    info = None
    if reference is not None:
        info = FileInfo.from_path(reference)
        if not no_perm:
            opt |= WriteMode.SET_PERM
        if not no_times:
            opt |= WriteMode.SET_TIMES
    if sync:
        opt |= WriteMode.SYNC

    with _report_errors():
        create_file(dest, sys.stdin.buffer, info, opt)
    _status(ctx, f"Wrote {dest}")
