from ._types import FileInfo, WriteMode, CopyMethod
from ._io import (
    set_info,
    copy_reader,
    copy_bytes,
    copy_file_contents,
    copy_reader_info,
    create_file,
    create_file_sync,
)
from ._copy import copy_file
from ._exclude import ExcludeFilter
from .sources import Destination, CopySource, FileSource, DataSource, ReaderSource, DirSource
from .tree import copy_tree
from .exceptions import TreeCopyError, NonRegularFileError, DirectoryCreateError, SourceError

__all__ = [
    "FileInfo", "WriteMode", "CopyMethod",
    "set_info", "copy_reader", "copy_bytes", "copy_file_contents",
    "copy_reader_info", "create_file", "create_file_sync",
    "copy_file", "copy_tree", "ExcludeFilter",
    "Destination", "CopySource", "FileSource", "DataSource", "ReaderSource", "DirSource",
    "TreeCopyError", "NonRegularFileError", "DirectoryCreateError", "SourceError",
]
