"""Typed file and folder handles over a pluggable backing store."""

from .domain import (
    EmptyPathError,
    File,
    FileError,
    Folder,
    FolioError,
    InvalidPathError,
    Item,
    ItemSequence,
    OperationError,
    PathError,
)
from .services import FileSystem

__all__ = [
    "EmptyPathError",
    "File",
    "FileError",
    "FileSystem",
    "Folder",
    "FolioError",
    "InvalidPathError",
    "Item",
    "ItemSequence",
    "OperationError",
    "PathError",
]
