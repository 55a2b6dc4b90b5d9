"""treecopy CLI — copy files and trees, write files from stdin."""

from ._helpers import main  # noqa: F401 — entry point

# Import command modules to register Click commands with the main group.
from . import _cp, _write  # noqa: F401
