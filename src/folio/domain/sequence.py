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
from typing import TYPE_CHECKING, Generic, Iterator, List, Optional, Type, TypeVar

from ..ports.filesystem import Entry, EntryKind, FilesystemPort
from . import paths
from .errors import InvalidPathError

if TYPE_CHECKING:
    from .items import Folder, Item

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Item")


class ItemSequence(Generic[T]):
    """
    Lazy, restartable traversal over a folder's files or subfolders.

    - Every call to `iter()` starts a fresh traversal against the backing
      store; nothing is cached between iterations.
    - Each directory level is listed once, filtered (hidden entries start
      with ".") and sorted by name before anything from it is yielded.
    - Recursive traversal yields a folder's own matches first, then walks
      each visible subfolder's subtree in the same order. Subfolders are
      only listed when the consumer actually gets that far.
    """

    def __init__(
        self,
        folder: Folder,
        item_type: Type[T],
        *,
        recursive: bool = False,
        include_hidden: bool = False,
    ) -> None:
        self._folder = folder
        self._item_type = item_type
        self._recursive = bool(recursive)
        self._include_hidden = bool(include_hidden)

    @property
    def folder(self) -> Folder:
        return self._folder

    @property
    def recursive(self) -> bool:
        return self._recursive

    @property
    def include_hidden(self) -> bool:
        return self._include_hidden

    def __repr__(self) -> str:
        return (
            f"ItemSequence({self._item_type.__name__}, folder={self.folder.path!r}, "
            f"recursive={self.recursive}, include_hidden={self.include_hidden})"
        )

    # ------------------------------
    # Traversal
    # ------------------------------

    def _entries(self, fs: FilesystemPort, folder_path: str) -> List[Entry]:
        entries = list(fs.list_children(folder_path))
        if not self._include_hidden:
            entries = [e for e in entries if not e.name.startswith(".")]
        return sorted(entries, key=lambda e: e.name)

    def _walk(self, fs: FilesystemPort, folder_path: str, top: bool = True) -> Iterator[T]:
        try:
            entries = self._entries(fs, folder_path)
        except OSError as e:
            if top:
                logger.debug("ItemSequence: listing %s failed: %s", folder_path, e)
                raise InvalidPathError(folder_path) from e
            # a descendant removed between two pulls is simply no longer there
            logger.debug("ItemSequence: skipping vanished folder %s: %s", folder_path, e)
            return
        kind = self._item_type.kind
        for entry in entries:
            if entry.kind is kind:
                yield self._item_type._wrap(paths.join(folder_path, entry.name, kind), fs)

        if not self._recursive:
            return
        for entry in entries:
            if entry.kind is EntryKind.FOLDER:
                yield from self._walk(
                    fs, paths.join(folder_path, entry.name, EntryKind.FOLDER), top=False
                )

    def __iter__(self) -> Iterator[T]:
        # Path is read at iteration time so a renamed folder is followed.
        return self._walk(self._folder.fs, self._folder.path)

    # ------------------------------
    # Derived operations
    # ------------------------------

    def count(self) -> int:
        return sum(1 for _ in self)

    def names(self) -> List[str]:
        return [item.name for item in self]

    def first(self) -> Optional[T]:
        return next(iter(self), None)

    def last(self) -> Optional[T]:
        item: Optional[T] = None
        for item in self:
            pass
        return item

    def move(self, to: Folder) -> None:
        """
        Move every element into `to`, in traversal order.

        Fail-fast: the first failing move raises `MoveFailedError` and
        elements moved before it stay moved. The traversal is taken up front
        so that moving into a folder inside the traversed tree can't cause
        entries to be visited twice. Descendants of a folder moved earlier in
        the same call already travelled with it and are skipped.
        """
        moved_folders: List[str] = []
        for item in list(self):
            if any(item.path.startswith(prefix) for prefix in moved_folders):
                continue
            original_path = item.path
            item.move(to)
            if item.kind is EntryKind.FOLDER:
                moved_folders.append(original_path)
