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

"""
Path model: turns raw strings into resolved, kind-tagged paths.

Resolved paths are absolute and use "/" as the separator. Folder paths end
in exactly one separator, file paths never do. The name of an entity is its
last path component; the root folder ("/") has an empty name and no parent.
"""

from __future__ import annotations

import posixpath
from typing import Optional, Tuple

from ..ports.filesystem import EntryKind, FilesystemPort
from .errors import EmptyPathError, InvalidPathError

SEPARATOR = "/"
ROOT = SEPARATOR


def _absolute(raw: str, fs: FilesystemPort) -> str:
    if raw == "~" or raw.startswith("~" + SEPARATOR):
        home = fs.home_directory()
        if home:
            raw = home.rstrip(SEPARATOR) + raw[1:]
    if not raw.startswith(SEPARATOR):
        raw = fs.current_working_directory().rstrip(SEPARATOR) + SEPARATOR + raw
    return raw


def normalize(raw: str, kind: EntryKind, fs: FilesystemPort) -> str:
    """
    Resolve `raw` to its stored form without checking the backing store.

    Raises:
        EmptyPathError: if `raw` is empty or only whitespace.
    """
    # whitespace only decides emptiness; "notes " is a legal file name
    if not raw or not raw.strip():
        raise EmptyPathError()

    path = posixpath.normpath(_absolute(raw, fs))
    # POSIX allows a leading "//"; collapse it like any other duplicate
    path = SEPARATOR + path.lstrip(SEPARATOR)

    if kind is EntryKind.FOLDER:
        return path if path == ROOT else path + SEPARATOR
    return path


def resolve(raw: str, kind: EntryKind, fs: FilesystemPort) -> str:
    """
    Resolve `raw` and validate that an entity of `kind` exists there.

    Raises:
        EmptyPathError: if `raw` is empty or only whitespace.
        InvalidPathError: if nothing of the requested kind lives at the path.
    """
    path = normalize(raw, kind, fs)
    if fs.exists(path) is not kind:
        raise InvalidPathError(path)
    return path


def name_of(path: str) -> str:
    return path.rstrip(SEPARATOR).rsplit(SEPARATOR, 1)[-1]


def parent_of(path: str) -> Optional[str]:
    """Parent folder path, or None for the root."""
    trimmed = path.rstrip(SEPARATOR)
    if not trimmed:
        return None
    return trimmed.rsplit(SEPARATOR, 1)[0] + SEPARATOR


def split_extension(name: str) -> Tuple[str, Optional[str]]:
    """
    Split a file name into (stem, extension).

    The extension is whatever follows the last "."; there is none when the
    name has no dot, starts with its only dot (".bashrc"), or ends in a dot.
    """
    index = name.rfind(".")
    if index <= 0 or index == len(name) - 1:
        return name, None
    return name[:index], name[index + 1:]


def join(folder_path: str, name: str, kind: EntryKind) -> str:
    """Path of the child `name` inside `folder_path`."""
    path = folder_path.rstrip(SEPARATOR) + SEPARATOR + name.strip(SEPARATOR)
    if kind is EntryKind.FOLDER:
        path += SEPARATOR
    return path
