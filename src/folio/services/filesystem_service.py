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

import logging
from typing import Callable, Optional

from ..adapters.local_fs import LocalFilesystem
from ..domain import paths
from ..domain.errors import CreateFileFailedError, CreateFolderFailedError
from ..domain.items import File, Folder
from ..ports.filesystem import EntryKind, FilesystemPort

logger = logging.getLogger(__name__)


class FileSystem:
    """
    Root construction point: binds a backing store and hands out handles.

    Every handle obtained here (and every child handle obtained from those)
    talks to the same adapter, so swapping in a MemoryFilesystem swaps the
    whole tree.
    """

    def __init__(self, fs: Optional[FilesystemPort] = None) -> None:
        self._fs = fs or LocalFilesystem()

    @property
    def adapter(self) -> FilesystemPort:
        return self._fs

    def _location(self, lookup: Callable[[], Optional[str]]) -> Optional[Folder]:
        path = lookup()
        if not path:
            return None
        path = paths.normalize(path, EntryKind.FOLDER, self._fs)
        if self._fs.exists(path) is not EntryKind.FOLDER:
            logger.debug("FileSystem: well-known location %s does not exist", path)
            return None
        return Folder(path, fs=self._fs)

    @property
    def root_folder(self) -> Optional[Folder]:
        return self._location(self._fs.root_directory)

    @property
    def home_folder(self) -> Optional[Folder]:
        return self._location(self._fs.home_directory)

    @property
    def temporary_folder(self) -> Optional[Folder]:
        return self._location(self._fs.temporary_directory)

    @property
    def current_folder(self) -> Optional[Folder]:
        return self._location(self._fs.current_working_directory)

    # ------------------------------
    # Lookups
    # ------------------------------

    def file(self, path: str) -> File:
        return File(path, fs=self._fs)

    def folder(self, path: str) -> Folder:
        return Folder(path, fs=self._fs)

    # ------------------------------
    # Creation at arbitrary paths
    # ------------------------------

    def _ensure_folder(self, path: str) -> Folder:
        """Walk down from the root creating any missing folders."""
        folder = Folder(paths.ROOT, fs=self._fs)
        for part in path.strip(paths.SEPARATOR).split(paths.SEPARATOR):
            if part:
                folder = folder.create_subfolder_if_needed(part)
        return folder

    def create_file(self, path: str, contents: Optional[bytes] = None) -> File:
        """
        Create a file at `path`, creating missing parent folders on the way.

        Raises:
            CreateFileFailedError: if something already exists at `path` or
                any parent could not be created.
        """
        target = paths.normalize(path, EntryKind.FILE, self._fs)
        parent_path = paths.parent_of(target)
        if parent_path is None:
            raise CreateFileFailedError(target)
        try:
            parent = self._ensure_folder(parent_path)
        except CreateFolderFailedError as e:
            raise CreateFileFailedError(target) from e
        return parent.create_file(paths.name_of(target), contents)

    def create_folder(self, path: str) -> Folder:
        """
        Create a folder at `path`, creating missing parent folders on the way.

        Raises:
            CreateFolderFailedError: if something already exists at `path` or
                any parent could not be created.
        """
        target = paths.normalize(path, EntryKind.FOLDER, self._fs)
        parent_path = paths.parent_of(target)
        if parent_path is None:
            raise CreateFolderFailedError(target)
        parent = self._ensure_folder(parent_path)
        return parent.create_subfolder(paths.name_of(target))

    def create_file_if_needed(self, path: str, contents: Optional[bytes] = None) -> File:
        target = paths.normalize(path, EntryKind.FILE, self._fs)
        if self._fs.exists(target) is EntryKind.FILE:
            return File(target, fs=self._fs)
        return self.create_file(target, contents)

    def create_folder_if_needed(self, path: str) -> Folder:
        target = paths.normalize(path, EntryKind.FOLDER, self._fs)
        if self._fs.exists(target) is EntryKind.FOLDER:
            return Folder(target, fs=self._fs)
        return self.create_folder(target)
