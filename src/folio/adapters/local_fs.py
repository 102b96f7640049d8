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
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from ..ports.filesystem import Entry, EntryKind, FilesystemPort


def _native(path: str) -> str:
    # os and shutil expect "/a/b" rather than the folder form "/a/b/"
    return path.rstrip("/") or "/"


def _refuse_existing(path: str) -> None:
    if os.path.lexists(path):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), path)


class LocalFilesystem(FilesystemPort):
    """
    Backing store over the operating system's filesystem.

    Thin on purpose: OSErrors from `os`/`shutil` bubble up unchanged so the
    domain layer can translate them. Symlinks are followed for kind checks.
    """

    def exists(self, path: str) -> EntryKind:
        if os.path.isdir(path):
            return EntryKind.FOLDER
        if os.path.isfile(path):
            return EntryKind.FILE
        return EntryKind.NOT_FOUND

    def list_children(self, path: str) -> Iterator[Entry]:
        with os.scandir(path) as it:
            entries = list(it)
        for entry in entries:
            try:
                if entry.is_dir():
                    yield Entry(entry.name, EntryKind.FOLDER)
                elif entry.is_file():
                    yield Entry(entry.name, EntryKind.FILE)
            except OSError:
                # broken symlink or entry removed between scandir and stat
                continue

    def create_file(self, path: str, data: bytes = b"") -> None:
        # "xb" refuses to clobber an existing file
        with open(path, "xb") as fh:
            fh.write(data)

    def create_folder(self, path: str) -> None:
        os.mkdir(path)

    def delete_entry(self, path: str, recursive: bool) -> None:
        path = _native(path)
        if os.path.isdir(path) and not os.path.islink(path):
            if recursive:
                shutil.rmtree(path)
            else:
                os.rmdir(path)
        else:
            os.remove(path)

    def rename_entry(self, old_path: str, new_path: str) -> None:
        old_path, new_path = _native(old_path), _native(new_path)
        _refuse_existing(new_path)
        os.rename(old_path, new_path)

    def move_entry(self, old_path: str, new_path: str) -> None:
        old_path, new_path = _native(old_path), _native(new_path)
        _refuse_existing(new_path)
        # shutil.move falls back to copy+delete across devices
        shutil.move(old_path, new_path)

    def copy_entry(self, old_path: str, new_path: str) -> None:
        old_path, new_path = _native(old_path), _native(new_path)
        _refuse_existing(new_path)
        if os.path.isdir(old_path):
            shutil.copytree(old_path, new_path)
        else:
            shutil.copy2(old_path, new_path)

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def write_bytes(self, path: str, data: bytes) -> None:
        Path(path).write_bytes(data)

    def append_bytes(self, path: str, data: bytes) -> None:
        with open(path, "ab") as fh:
            fh.write(data)

    def modified_at(self, path: str) -> Optional[datetime]:
        st = os.stat(path)
        return datetime.fromtimestamp(st.st_mtime)

    def current_working_directory(self) -> str:
        return os.getcwd()

    def home_directory(self) -> Optional[str]:
        home = os.path.expanduser("~")
        # expanduser returns its input unchanged when HOME can't be determined
        return None if home == "~" else home

    def temporary_directory(self) -> Optional[str]:
        return tempfile.gettempdir()
