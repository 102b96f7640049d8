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

import enum
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, NamedTuple, Optional


class EntryKind(enum.Enum):
    NOT_FOUND = "not_found"
    FILE = "file"
    FOLDER = "folder"


class Entry(NamedTuple):
    """A single directory entry as reported by a backing store."""

    name: str
    kind: EntryKind


class FilesystemPort(ABC):
    """
    Abstract interface for the backing store.

    Paths are plain strings. Folder paths may carry a trailing separator.
    Every mutating or reading call signals failure by raising ``OSError``
    (or a subclass); callers translate those into domain errors.
    """

    @abstractmethod
    def exists(self, path: str) -> EntryKind:
        """Report what, if anything, lives at `path`."""
        raise NotImplementedError

    @abstractmethod
    def list_children(self, path: str) -> Iterable[Entry]:
        """Return the direct children of the folder at `path`."""
        raise NotImplementedError

    @abstractmethod
    def create_file(self, path: str, data: bytes = b"") -> None:
        """Create a new file. Must fail if anything already exists at `path`."""
        raise NotImplementedError

    @abstractmethod
    def create_folder(self, path: str) -> None:
        """Create a new, empty folder. The parent must already exist."""
        raise NotImplementedError

    @abstractmethod
    def delete_entry(self, path: str, recursive: bool) -> None:
        raise NotImplementedError

    @abstractmethod
    def rename_entry(self, old_path: str, new_path: str) -> None:
        """Rename within the same folder. Never overwrites `new_path`."""
        raise NotImplementedError

    @abstractmethod
    def move_entry(self, old_path: str, new_path: str) -> None:
        """Move to another folder. Never overwrites `new_path`."""
        raise NotImplementedError

    @abstractmethod
    def copy_entry(self, old_path: str, new_path: str) -> None:
        """Copy a file or a whole folder tree. Never overwrites `new_path`."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def write_bytes(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def append_bytes(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def modified_at(self, path: str) -> Optional[datetime]:
        """Last modification time, or None if the store does not track it."""
        raise NotImplementedError

    @abstractmethod
    def current_working_directory(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def home_directory(self) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def temporary_directory(self) -> Optional[str]:
        raise NotImplementedError

    def root_directory(self) -> Optional[str]:
        return "/"
