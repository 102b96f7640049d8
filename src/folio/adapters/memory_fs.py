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

import errno
import os
import posixpath
import threading
from datetime import datetime
from typing import Dict, List, Optional

from ..ports.filesystem import Entry, EntryKind, FilesystemPort


def _key(path: str) -> str:
    p = posixpath.normpath(path)
    # normpath keeps a leading "//" as-is
    return "/" + p.lstrip("/")


def _oserror(code: int, path: str) -> OSError:
    exc_type = {
        errno.ENOENT: FileNotFoundError,
        errno.EEXIST: FileExistsError,
        errno.EISDIR: IsADirectoryError,
        errno.ENOTDIR: NotADirectoryError,
    }.get(code, OSError)
    return exc_type(code, os.strerror(code), path)


class MemoryFilesystem(FilesystemPort):
    """
    In-process backing store keyed by absolute POSIX paths.

    Useful as a test double and for dry runs. Folders and files live in two
    insertion-ordered tables; children are found by scanning the tables, which
    is fine for the small trees this is meant for.

    Notes:
      * Only absolute paths are accepted; resolve relative paths first.
      * `cwd`, `home` and `temp` are created as folders on construction.
    """

    def __init__(
        self,
        *,
        cwd: str = "/",
        home: Optional[str] = "/home/user",
        temp: Optional[str] = "/tmp",
    ) -> None:
        self._lock = threading.RLock()
        self._folders: Dict[str, datetime] = {"/": datetime.now()}
        self._files: Dict[str, bytearray] = {}
        self._file_mtimes: Dict[str, datetime] = {}
        self._home = home
        self._temp = temp
        for location in (home, temp, cwd):
            if location:
                self.make_dirs(location)
        self._cwd = _key(cwd)

    # ------------------------------
    # Helpers
    # ------------------------------

    def make_dirs(self, path: str) -> None:
        """Create `path` and any missing parents (mkdir -p)."""
        with self._lock:
            current = "/"
            for part in _key(path).strip("/").split("/"):
                if not part:
                    continue
                current = posixpath.join(current, part)
                if current in self._files:
                    raise _oserror(errno.ENOTDIR, current)
                self._folders.setdefault(current, datetime.now())

    def chdir(self, path: str) -> None:
        key = _key(path)
        if key not in self._folders:
            raise _oserror(errno.ENOENT, path)
        self._cwd = key

    def _require_parent(self, key: str) -> None:
        parent = posixpath.dirname(key)
        if parent not in self._folders:
            raise _oserror(errno.ENOENT, key)

    def _refuse_existing(self, key: str) -> None:
        if key in self._folders or key in self._files:
            raise _oserror(errno.EEXIST, key)

    def _descendants(self, key: str) -> List[str]:
        prefix = key.rstrip("/") + "/"
        return [p for p in list(self._folders) + list(self._files) if p.startswith(prefix)]

    # ------------------------------
    # FilesystemPort
    # ------------------------------

    def exists(self, path: str) -> EntryKind:
        key = _key(path)
        with self._lock:
            if key in self._folders:
                return EntryKind.FOLDER
            if key in self._files:
                # "/a/file/" must not resolve to a file
                return EntryKind.FILE if not path.endswith("/") else EntryKind.NOT_FOUND
        return EntryKind.NOT_FOUND

    def list_children(self, path: str) -> List[Entry]:
        key = _key(path)
        with self._lock:
            if key not in self._folders:
                raise _oserror(errno.ENOTDIR if key in self._files else errno.ENOENT, path)
            entries = [
                Entry(posixpath.basename(p), EntryKind.FOLDER)
                for p in self._folders
                if p != "/" and posixpath.dirname(p) == key
            ]
            entries += [
                Entry(posixpath.basename(p), EntryKind.FILE)
                for p in self._files
                if posixpath.dirname(p) == key
            ]
            return entries

    def create_file(self, path: str, data: bytes = b"") -> None:
        key = _key(path)
        with self._lock:
            self._refuse_existing(key)
            self._require_parent(key)
            self._files[key] = bytearray(data)
            self._file_mtimes[key] = datetime.now()

    def create_folder(self, path: str) -> None:
        key = _key(path)
        with self._lock:
            self._refuse_existing(key)
            self._require_parent(key)
            self._folders[key] = datetime.now()

    def delete_entry(self, path: str, recursive: bool) -> None:
        key = _key(path)
        with self._lock:
            if key in self._files:
                del self._files[key]
                self._file_mtimes.pop(key, None)
                return
            if key not in self._folders or key == "/":
                raise _oserror(errno.ENOENT if key != "/" else errno.EPERM, path)
            descendants = self._descendants(key)
            if descendants and not recursive:
                raise _oserror(errno.ENOTEMPTY, path)
            for p in descendants:
                self._folders.pop(p, None)
                self._files.pop(p, None)
                self._file_mtimes.pop(p, None)
            del self._folders[key]

    def _relocate(self, old_path: str, new_path: str, keep_source: bool) -> None:
        old, new = _key(old_path), _key(new_path)
        with self._lock:
            if old not in self._folders and old not in self._files:
                raise _oserror(errno.ENOENT, old_path)
            self._refuse_existing(new)
            self._require_parent(new)
            if old in self._files:
                self._files[new] = bytearray(self._files[old])
                self._file_mtimes[new] = self._file_mtimes[old]
                if not keep_source:
                    del self._files[old]
                    del self._file_mtimes[old]
                return
            if new == old or new.startswith(old.rstrip("/") + "/"):
                raise _oserror(errno.EINVAL, new_path)
            moved = [old] + self._descendants(old)
            for p in moved:
                target = new + p[len(old):]
                if p in self._folders:
                    self._folders[target] = self._folders[p]
                else:
                    self._files[target] = bytearray(self._files[p])
                    self._file_mtimes[target] = self._file_mtimes[p]
            if not keep_source:
                for p in moved:
                    self._folders.pop(p, None)
                    self._files.pop(p, None)
                    self._file_mtimes.pop(p, None)

    def rename_entry(self, old_path: str, new_path: str) -> None:
        self._relocate(old_path, new_path, keep_source=False)

    def move_entry(self, old_path: str, new_path: str) -> None:
        self._relocate(old_path, new_path, keep_source=False)

    def copy_entry(self, old_path: str, new_path: str) -> None:
        self._relocate(old_path, new_path, keep_source=True)

    def read_bytes(self, path: str) -> bytes:
        key = _key(path)
        with self._lock:
            if key in self._folders:
                raise _oserror(errno.EISDIR, path)
            if key not in self._files:
                raise _oserror(errno.ENOENT, path)
            return bytes(self._files[key])

    def write_bytes(self, path: str, data: bytes) -> None:
        key = _key(path)
        with self._lock:
            if key in self._folders:
                raise _oserror(errno.EISDIR, path)
            self._require_parent(key)
            self._files[key] = bytearray(data)
            self._file_mtimes[key] = datetime.now()

    def append_bytes(self, path: str, data: bytes) -> None:
        key = _key(path)
        with self._lock:
            if key in self._folders:
                raise _oserror(errno.EISDIR, path)
            self._require_parent(key)
            self._files.setdefault(key, bytearray()).extend(data)
            self._file_mtimes[key] = datetime.now()

    def modified_at(self, path: str) -> Optional[datetime]:
        key = _key(path)
        with self._lock:
            if key in self._folders:
                return self._folders[key]
            if key in self._file_mtimes:
                return self._file_mtimes[key]
        raise _oserror(errno.ENOENT, path)

    def current_working_directory(self) -> str:
        return self._cwd

    def home_directory(self) -> Optional[str]:
        return self._home

    def temporary_directory(self) -> Optional[str]:
        return self._temp
