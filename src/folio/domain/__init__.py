from .errors import (
    CopyFailedError,
    CreateFileFailedError,
    CreateFolderFailedError,
    DeleteFailedError,
    EmptyPathError,
    EncodingFailedError,
    FileError,
    FolioError,
    InvalidPathError,
    MoveFailedError,
    OperationError,
    PathError,
    ReadFailedError,
    RenameFailedError,
    WriteFailedError,
)
from .items import File, Folder, Item
from .sequence import ItemSequence

__all__ = [
    "CopyFailedError",
    "CreateFileFailedError",
    "CreateFolderFailedError",
    "DeleteFailedError",
    "EmptyPathError",
    "EncodingFailedError",
    "File",
    "FileError",
    "Folder",
    "FolioError",
    "InvalidPathError",
    "Item",
    "ItemSequence",
    "MoveFailedError",
    "OperationError",
    "PathError",
    "ReadFailedError",
    "RenameFailedError",
    "WriteFailedError",
]
