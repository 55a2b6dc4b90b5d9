"""Shared helpers and the main CLI group."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import click

from ..exceptions import TreeCopyError


def _configure_logging(verbose: bool) -> None:
    """Send treecopy's debug records to stderr when -v is given."""
    if verbose:
        logging.basicConfig(level=logging.WARNING, format="%(name)s: %(message)s")
        logging.getLogger("treecopy").setLevel(logging.DEBUG)


def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


@contextmanager
def _report_errors() -> Iterator[None]:
    """Turn library and filesystem errors into ClickExceptions."""
    try:
        yield
    except (TreeCopyError, OSError) as exc:
        raise click.ClickException(str(exc))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """treecopy — copy files and directory trees.

    Regular files are hard-linked when possible and copied (with mtime
    and mode preserved) otherwise.  Symlinks and special files inside
    copied directories are skipped.

    \b
    Quick start:
      treecopy cp notes.txt src/ backup/
      treecopy cp --exclude '*.pyc' project/ out/
      echo hi | treecopy write --reference tmpl.txt out/hi.txt
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose)
