from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .items import File, Item


class FolioError(Exception):
    """
    Base exception for domain-specific errors.

    Errors compare equal when they are the same class with the same payload,
    so callers can assert on them directly.
    """

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FolioError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    __hash__ = Exception.__hash__


# ------------------------------
# Path errors
# ------------------------------


class PathError(FolioError):
    """A handle could not be constructed from a path."""


class EmptyPathError(PathError):
    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Path is empty"


class InvalidPathError(PathError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Invalid path: {self.path}"


# ------------------------------
# Operation errors
# ------------------------------


class OperationError(FolioError):
    """A structural mutation (create, rename, move, copy, delete) failed."""


class _ItemOperationError(OperationError):
    verb = "operate on"

    def __init__(self, item: Item) -> None:
        super().__init__(item)
        self.item = item

    def __str__(self) -> str:
        return f"Failed to {self.verb} {self.item}"


class RenameFailedError(_ItemOperationError):
    verb = "rename"


class MoveFailedError(_ItemOperationError):
    verb = "move"


class CopyFailedError(_ItemOperationError):
    verb = "copy"


class DeleteFailedError(_ItemOperationError):
    verb = "delete"


class CreateFileFailedError(OperationError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Failed to create file at {self.path}"


class CreateFolderFailedError(OperationError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Failed to create folder at {self.path}"


# ------------------------------
# File content errors
# ------------------------------


class FileError(FolioError):
    """Reading or writing file content failed."""


class ReadFailedError(FileError):
    def __init__(self, file: File) -> None:
        super().__init__(file)
        self.file = file

    def __str__(self) -> str:
        return f"Failed to read {self.file}"


class WriteFailedError(FileError):
    def __init__(self, file: File) -> None:
        super().__init__(file)
        self.file = file

    def __str__(self) -> str:
        return f"Failed to write {self.file}"


class EncodingFailedError(FileError):
    def __init__(self, file: File, encoding: str) -> None:
        super().__init__(file, encoding)
        self.file = file
        self.encoding = encoding

    def __str__(self) -> str:
        return f"Could not encode text as {self.encoding} for {self.file}"
