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
from typing import Optional

import typer

from ..adapters.local_fs import LocalFilesystem
from ..domain import paths
from ..domain.errors import FolioError
from ..domain.items import Folder, Item
from ..ports.filesystem import EntryKind, FilesystemPort
from ..services import FileSystem

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(help="Folio CLI - browse and reshape folders through typed handles")

logger = logging.getLogger(__name__)

# Adapter used by every command; tests may swap in a MemoryFilesystem.
_adapter: Optional[FilesystemPort] = None


def _filesystem() -> FileSystem:
    return FileSystem(_adapter or LocalFilesystem())


def _item(fs: FileSystem, path: str) -> Item:
    """Resolve `path` to a File or Folder handle, whichever exists."""
    if fs.adapter.exists(paths.normalize(path, EntryKind.FOLDER, fs.adapter)) is EntryKind.FOLDER:
        return fs.folder(path)
    return fs.file(path)


def _fail(e: FolioError) -> None:
    typer.echo(f"error: {e}", err=True)
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


# ------------------------------
# CLI Commands
# ------------------------------


@app.command("ls")
def list_folder(
    path: str = typer.Argument(".", help="Folder to list"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Descend into subfolders"),
    include_hidden: bool = typer.Option(False, "--all", "-a", help="Include entries starting with '.'"),
    folders: bool = typer.Option(False, "--folders", help="List subfolders instead of files"),
):
    """
    List a folder's files (or subfolders), one per line.
    """
    try:
        folder = _filesystem().folder(path)
        if folders:
            sequence = folder.make_subfolder_sequence(recursive=recursive, include_hidden=include_hidden)
        else:
            sequence = folder.make_file_sequence(recursive=recursive, include_hidden=include_hidden)
        for item in sequence:
            typer.echo(item.path if recursive else item.name)
    except FolioError as e:
        _fail(e)


@app.command()
def cat(path: str = typer.Argument(..., help="File to print")):
    """
    Print a file's content as UTF-8 text.
    """
    try:
        typer.echo(_filesystem().file(path).read_text(), nl=False)
    except FolioError as e:
        _fail(e)


@app.command()
def write(
    path: str = typer.Argument(..., help="Existing file to write to"),
    text: str = typer.Argument(..., help="Text to write"),
    append: bool = typer.Option(False, "--append", help="Append instead of replacing"),
):
    """
    Replace (or append to) a file's content.
    """
    try:
        file = _filesystem().file(path)
        if append:
            file.append(text)
        else:
            file.write(text)
    except FolioError as e:
        _fail(e)


@app.command()
def touch(path: str = typer.Argument(..., help="File to create")):
    """
    Create an empty file, creating missing parent folders.
    """
    try:
        file = _filesystem().create_file_if_needed(path)
        typer.echo(file.path)
    except FolioError as e:
        _fail(e)


@app.command()
def mkdir(path: str = typer.Argument(..., help="Folder to create")):
    """
    Create a folder, creating missing parent folders.
    """
    try:
        folder = _filesystem().create_folder_if_needed(path)
        typer.echo(folder.path)
    except FolioError as e:
        _fail(e)


@app.command()
def mv(
    source: str = typer.Argument(..., help="File or folder to move"),
    destination: str = typer.Argument(..., help="Folder to move it into"),
):
    """
    Move a file or folder into another folder.
    """
    try:
        fs = _filesystem()
        item = _item(fs, source)
        item.move(fs.folder(destination))
        typer.echo(item.path)
    except FolioError as e:
        _fail(e)


@app.command()
def rename(
    path: str = typer.Argument(..., help="File or folder to rename"),
    new_name: str = typer.Argument(..., help="New name"),
    keep_extension: bool = typer.Option(
        True,
        "--keep-extension/--no-keep-extension",
        help="Keep a file's extension when the new name has none.",
    ),
):
    """
    Rename a file or folder in place.
    """
    try:
        item = _item(_filesystem(), path)
        item.rename(new_name, keep_extension=keep_extension)
        typer.echo(item.path)
    except FolioError as e:
        _fail(e)


@app.command()
def rm(path: str = typer.Argument(..., help="File or folder to delete")):
    """
    Delete a file, or a folder with everything inside it.
    """
    try:
        _item(_filesystem(), path).delete()
    except FolioError as e:
        _fail(e)


@app.command()
def empty(
    path: str = typer.Argument(..., help="Folder to empty"),
    include_hidden: bool = typer.Option(False, "--all", "-a", help="Also delete hidden entries"),
):
    """
    Delete everything inside a folder, keeping the folder itself.
    """
    try:
        folder: Folder = _filesystem().folder(path)
        folder.empty(include_hidden=include_hidden)
    except FolioError as e:
        _fail(e)
