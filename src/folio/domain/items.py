# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar, Optional, Type, TypeVar, Union

from ..ports.filesystem import EntryKind, FilesystemPort
from . import paths
from .errors import (
    CopyFailedError,
    CreateFileFailedError,
    CreateFolderFailedError,
    DeleteFailedError,
    EncodingFailedError,
    MoveFailedError,
    ReadFailedError,
    RenameFailedError,
    WriteFailedError,
)
from .sequence import ItemSequence

logger = logging.getLogger(__name__)

I = TypeVar("I", bound="Item")

_default_fs: Optional[FilesystemPort] = None


def default_filesystem() -> FilesystemPort:
    """Process-wide LocalFilesystem used when no adapter is passed in."""
    global _default_fs
    if _default_fs is None:
        from ..adapters.local_fs import LocalFilesystem

        _default_fs = LocalFilesystem()
    return _default_fs


class Item:
    """
    Shared behaviour of File and Folder handles.

    A handle owns its path. Mutations go to the backing store first and the
    path is only updated once the store call succeeded, so a handle always
    reflects the last successful operation made *through it*. Other handles
    to the same entity are not kept in sync.
    """

    kind: ClassVar[EntryKind]

    def __init__(self, path: str, *, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or default_filesystem()
        self._path = paths.resolve(path, self.kind, self._fs)

    @classmethod
    def _wrap(cls: Type[I], path: str, fs: FilesystemPort) -> I:
        """Wrap a path the store has just reported, skipping re-validation."""
        item = cls.__new__(cls)
        item._fs = fs
        item._path = paths.normalize(path, cls.kind, fs)
        return item

    # ------------------------------
    # Derived, no I/O
    # ------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def name(self) -> str:
        return paths.name_of(self._path)

    @property
    def fs(self) -> FilesystemPort:
        return self._fs

    def __str__(self) -> str:
        return f"{type(self).__name__}(name: {self.name}, path: {self.path})"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return type(self) is type(other) and self._path == other._path

    # Hash follows the current path, so it changes after rename/move.
    def __hash__(self) -> int:
        return hash((type(self).__name__, self._path))

    # ------------------------------
    # Store lookups
    # ------------------------------

    @property
    def parent(self) -> Optional[Folder]:
        parent_path = paths.parent_of(self._path)
        if parent_path is None:
            return None
        return Folder(parent_path, fs=self._fs)

    def exists(self) -> bool:
        return self._fs.exists(self._path) is self.kind

    @property
    def modification_date(self) -> Optional[datetime]:
        """Last modification time; None once the entity is gone."""
        if not self.exists():
            return None
        return self._fs.modified_at(self._path)

    # ------------------------------
    # Mutations
    # ------------------------------

    def _renamed_path(self, new_name: str, keep_extension: bool) -> Optional[str]:
        parent_path = paths.parent_of(self._path)
        if parent_path is None:
            return None
        return paths.join(parent_path, new_name, self.kind)

    def rename(self, new_name: str, keep_extension: bool = True) -> None:
        """
        Rename in place, keeping the entity in its current folder.

        Raises:
            RenameFailedError: if the store refused, the name is empty or
                contains a separator, or this is the root folder.
        """
        new_path = None
        if new_name and paths.SEPARATOR not in new_name:
            new_path = self._renamed_path(new_name, keep_extension)
        if new_path is None:
            raise RenameFailedError(self)
        try:
            self._fs.rename_entry(self._path, new_path)
        except OSError as e:
            logger.debug("rename %s -> %s failed: %s", self._path, new_path, e)
            raise RenameFailedError(self) from e
        logger.debug("renamed %s -> %s", self._path, new_path)
        self._path = new_path

    def move(self, to: Folder) -> None:
        """
        Move into `to`, keeping the current name.

        Raises:
            MoveFailedError: if the store refused, including when something
                already exists at the destination.
        """
        new_path = paths.join(to.path, self.name, self.kind)
        try:
            self._fs.move_entry(self._path, new_path)
        except OSError as e:
            logger.debug("move %s -> %s failed: %s", self._path, new_path, e)
            raise MoveFailedError(self) from e
        logger.debug("moved %s -> %s", self._path, new_path)
        self._path = new_path

    def copy(self: I, to: Folder) -> I:
        """
        Copy into `to` and return a handle to the copy.

        Raises:
            CopyFailedError: if the store refused, including when something
                already exists at the destination.
        """
        new_path = paths.join(to.path, self.name, self.kind)
        try:
            self._fs.copy_entry(self._path, new_path)
        except OSError as e:
            logger.debug("copy %s -> %s failed: %s", self._path, new_path, e)
            raise CopyFailedError(self) from e
        return type(self)._wrap(new_path, to.fs)

    def delete(self) -> None:
        """
        Delete the entity (folders recursively).

        The handle keeps its path afterwards; every later operation on it
        fails because the path no longer resolves.

        Raises:
            DeleteFailedError: if nothing of this kind is at the path or the
                store refused.
        """
        if not self.exists():
            raise DeleteFailedError(self)
        try:
            self._fs.delete_entry(self._path, recursive=self.kind is EntryKind.FOLDER)
        except OSError as e:
            logger.debug("delete %s failed: %s", self._path, e)
            raise DeleteFailedError(self) from e
        logger.debug("deleted %s", self._path)


class File(Item):
    """Handle to a file in the backing store."""

    kind = EntryKind.FILE

    @property
    def extension(self) -> Optional[str]:
        return paths.split_extension(self.name)[1]

    @property
    def name_excluding_extension(self) -> str:
        return paths.split_extension(self.name)[0]

    def _renamed_path(self, new_name: str, keep_extension: bool) -> Optional[str]:
        # An extension in the new name always wins over keep_extension.
        if keep_extension and paths.split_extension(new_name)[1] is None:
            extension = self.extension
            if extension is not None:
                new_name = f"{new_name}.{extension}"
        return super()._renamed_path(new_name, keep_extension)

    # ------------------------------
    # Content
    # ------------------------------

    def read(self) -> bytes:
        try:
            return self._fs.read_bytes(self._path)
        except OSError as e:
            logger.debug("read %s failed: %s", self._path, e)
            raise ReadFailedError(self) from e

    def read_text(self, encoding: str = "utf-8") -> str:
        data = self.read()
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise ReadFailedError(self) from e

    def read_int(self) -> int:
        text = self.read_text()
        try:
            return int(text.strip())
        except ValueError as e:
            raise ReadFailedError(self) from e

    def _encode(self, data: Union[bytes, str], encoding: str) -> bytes:
        if isinstance(data, str):
            try:
                return data.encode(encoding)
            except (UnicodeEncodeError, LookupError) as e:
                raise EncodingFailedError(self, encoding) from e
        return bytes(data)

    def write(self, data: Union[bytes, str], encoding: str = "utf-8") -> None:
        """
        Replace the file's content. Text is encoded with `encoding` first.

        Raises:
            EncodingFailedError: if the text can't be encoded.
            WriteFailedError: if the file is gone or the store refused.
        """
        payload = self._encode(data, encoding)
        # never recreate a deleted file
        if not self.exists():
            raise WriteFailedError(self)
        try:
            self._fs.write_bytes(self._path, payload)
        except OSError as e:
            logger.debug("write %s failed: %s", self._path, e)
            raise WriteFailedError(self) from e

    def append(self, data: Union[bytes, str], encoding: str = "utf-8") -> None:
        payload = self._encode(data, encoding)
        if not self.exists():
            raise WriteFailedError(self)
        try:
            self._fs.append_bytes(self._path, payload)
        except OSError as e:
            logger.debug("append %s failed: %s", self._path, e)
            raise WriteFailedError(self) from e


class Folder(Item):
    """Handle to a folder in the backing store."""

    kind = EntryKind.FOLDER

    # ------------------------------
    # Children
    # ------------------------------

    def file(self, name: str) -> File:
        """Direct child file `name`; raises InvalidPathError if absent."""
        return File(paths.join(self._path, name, EntryKind.FILE), fs=self._fs)

    def subfolder(self, name: str) -> Folder:
        """Direct child folder `name`; raises InvalidPathError if absent."""
        return Folder(paths.join(self._path, name, EntryKind.FOLDER), fs=self._fs)

    def contains_file(self, name: str) -> bool:
        return self._fs.exists(paths.join(self._path, name, EntryKind.FILE)) is EntryKind.FILE

    def contains_subfolder(self, name: str) -> bool:
        path = paths.join(self._path, name, EntryKind.FOLDER)
        return self._fs.exists(path) is EntryKind.FOLDER

    def create_file(self, name: str, contents: Optional[bytes] = None) -> File:
        """
        Create a new file named `name` with optional initial content.

        Raises:
            CreateFileFailedError: if anything already exists there or the
                store refused.
        """
        path = paths.join(self._path, name, EntryKind.FILE)
        if not name or self._fs.exists(path) is not EntryKind.NOT_FOUND:
            raise CreateFileFailedError(path)
        try:
            self._fs.create_file(path, contents or b"")
        except OSError as e:
            logger.debug("create file %s failed: %s", path, e)
            raise CreateFileFailedError(path) from e
        logger.debug("created file %s", path)
        return File._wrap(path, self._fs)

    def create_subfolder(self, name: str) -> Folder:
        """
        Create a new, empty subfolder named `name`.

        Raises:
            CreateFolderFailedError: if anything already exists there or the
                store refused.
        """
        path = paths.join(self._path, name, EntryKind.FOLDER)
        if not name or self._fs.exists(path) is not EntryKind.NOT_FOUND:
            raise CreateFolderFailedError(path)
        try:
            self._fs.create_folder(path)
        except OSError as e:
            logger.debug("create folder %s failed: %s", path, e)
            raise CreateFolderFailedError(path) from e
        logger.debug("created folder %s", path)
        return Folder._wrap(path, self._fs)

    def create_file_if_needed(self, name: str, contents: Optional[bytes] = None) -> File:
        if self.contains_file(name):
            return self.file(name)
        return self.create_file(name, contents)

    def create_subfolder_if_needed(self, name: str) -> Folder:
        if self.contains_subfolder(name):
            return self.subfolder(name)
        return self.create_subfolder(name)

    # ------------------------------
    # Sequences
    # ------------------------------

    def make_file_sequence(
        self, recursive: bool = False, include_hidden: bool = False
    ) -> ItemSequence[File]:
        return ItemSequence(self, File, recursive=recursive, include_hidden=include_hidden)

    def make_subfolder_sequence(
        self, recursive: bool = False, include_hidden: bool = False
    ) -> ItemSequence[Folder]:
        return ItemSequence(self, Folder, recursive=recursive, include_hidden=include_hidden)

    @property
    def files(self) -> ItemSequence[File]:
        return self.make_file_sequence()

    @property
    def subfolders(self) -> ItemSequence[Folder]:
        return self.make_subfolder_sequence()

    # ------------------------------
    # Bulk operations
    # ------------------------------

    def empty(self, include_hidden: bool = False) -> None:
        """Delete every direct child, skipping hidden ones unless asked."""
        for folder in list(self.make_subfolder_sequence(include_hidden=include_hidden)):
            folder.delete()
        for file in list(self.make_file_sequence(include_hidden=include_hidden)):
            file.delete()

    def move_contents(self, to: Folder, include_hidden: bool = False) -> None:
        self.make_file_sequence(include_hidden=include_hidden).move(to)
        self.make_subfolder_sequence(include_hidden=include_hidden).move(to)

