# tests/unit/test_items.py
import pytest

from folio.adapters.memory_fs import MemoryFilesystem
from folio.domain.errors import (
    CopyFailedError,
    CreateFileFailedError,
    CreateFolderFailedError,
    DeleteFailedError,
    EmptyPathError,
    EncodingFailedError,
    InvalidPathError,
    MoveFailedError,
    ReadFailedError,
    RenameFailedError,
    WriteFailedError,
)
from folio.domain.items import File, Folder
from folio.ports.filesystem import EntryKind


def test_create_file_properties(folder: Folder):
    file = folder.create_file("test.txt")
    assert file.name == "test.txt"
    assert file.path == folder.path + "test.txt"
    assert file.extension == "txt"
    assert file.name_excluding_extension == "test"
    assert file.read() == b""


def test_create_file_with_contents(folder: Folder):
    file = folder.create_file("notes", b"hello")
    assert file.read() == b"hello"


def test_create_existing_entities_fails(folder: Folder):
    folder.create_file("a")
    folder.create_subfolder("b")

    with pytest.raises(CreateFileFailedError) as exc_info:
        folder.create_file("a")
    assert exc_info.value == CreateFileFailedError("/tmp/a")

    with pytest.raises(CreateFolderFailedError):
        folder.create_subfolder("b")
    # a folder blocks a file of the same name and vice versa
    with pytest.raises(CreateFileFailedError):
        folder.create_file("b")
    with pytest.raises(CreateFolderFailedError):
        folder.create_subfolder("a")


def test_if_needed_variants_return_existing(folder: Folder):
    created = folder.create_file_if_needed("a", b"first")
    again = folder.create_file_if_needed("a", b"second")
    assert created == again
    assert again.read() == b"first"

    sub = folder.create_subfolder_if_needed("s")
    assert folder.create_subfolder_if_needed("s") == sub


def test_delete_file_invalidates_handle(folder: Folder, memfs: MemoryFilesystem):
    file = folder.create_file("test.txt")
    File(file.path, fs=memfs)

    file.delete()

    with pytest.raises(ReadFailedError) as exc_info:
        file.read()
    assert exc_info.value == ReadFailedError(file)

    with pytest.raises(InvalidPathError) as exc_info:
        File(file.path, fs=memfs)
    assert exc_info.value == InvalidPathError(file.path)

    with pytest.raises(DeleteFailedError) as exc_info:
        file.delete()
    assert exc_info.value == DeleteFailedError(file)
    # the handle keeps reporting its old path
    assert file.path == "/tmp/test.txt"


def test_delete_folder_removes_descendants(folder: Folder, memfs: MemoryFilesystem):
    sub = folder.create_subfolder("folder")
    assert sub.name == "folder"
    assert sub.path == folder.path + "folder/"
    nested = sub.create_subfolder("nested").create_file("deep")
    file = sub.create_file("file")

    sub.delete()

    with pytest.raises(InvalidPathError) as exc_info:
        Folder(sub.path, fs=memfs)
    assert exc_info.value == InvalidPathError(sub.path)
    for f in (file, nested):
        with pytest.raises(ReadFailedError):
            f.read()


def test_rename_file_keeps_extension(folder: Folder):
    file = folder.create_file("file.json")
    file.rename("renamedFile")
    assert file.name == "renamedFile.json"
    assert file.path == folder.path + "renamedFile.json"
    assert file.extension == "json"

    file.rename("other.txt", keep_extension=False)
    assert file.name == "other.txt"
    assert file.extension == "txt"


def test_rename_with_extension_in_new_name_overrides_flag(folder: Folder):
    file = folder.create_file("a.ext1")
    file.rename("x.ext2")
    assert file.name == "x.ext2"
    assert file.extension == "ext2"

    file.rename("y.json", keep_extension=True)
    assert file.name == "y.json"


def test_rename_without_keeping_extension_strips_it(folder: Folder):
    file = folder.create_file("a.ext1")
    file.rename("x", keep_extension=False)
    assert file.name == "x"
    assert file.extension is None


def test_rename_folder(folder: Folder):
    sub = folder.create_subfolder("folder")
    sub.create_file("inside")
    sub.rename("renamedFolder")
    assert sub.name == "renamedFolder"
    assert sub.path == folder.path + "renamedFolder/"
    assert sub.file("inside").read() == b""


def test_failed_rename_leaves_handle_unchanged(folder: Folder):
    file = folder.create_file("a.txt")
    folder.create_file("b.txt")
    with pytest.raises(RenameFailedError) as exc_info:
        file.rename("b")
    assert exc_info.value == RenameFailedError(file)
    assert file.path == "/tmp/a.txt"

    with pytest.raises(RenameFailedError):
        file.rename("")


def test_rename_root_fails(memfs: MemoryFilesystem):
    root = Folder("/", fs=memfs)
    with pytest.raises(RenameFailedError):
        root.rename("anything")


def test_other_handles_do_not_follow_a_rename(folder: Folder, memfs: MemoryFilesystem):
    file = folder.create_file("a")
    other = File(file.path, fs=memfs)
    file.rename("b")
    assert other.path == "/tmp/a"
    with pytest.raises(ReadFailedError):
        other.read()


def test_move_file(folder: Folder):
    file = folder.create_file("a", b"x")
    dest = folder.create_subfolder("dest")
    file.move(dest)
    assert file.path == "/tmp/dest/a"
    assert file.read() == b"x"
    assert not folder.contains_file("a")


def test_move_onto_existing_fails(folder: Folder):
    file = folder.create_file("a")
    dest = folder.create_subfolder("dest")
    dest.create_file("a")
    with pytest.raises(MoveFailedError) as exc_info:
        file.move(dest)
    assert exc_info.value == MoveFailedError(file)
    assert file.path == "/tmp/a"


def test_move_folder_into_itself_fails(folder: Folder):
    sub = folder.create_subfolder("s")
    inner = sub.create_subfolder("inner")
    with pytest.raises(MoveFailedError):
        sub.move(inner)


def test_copy_file_and_folder(folder: Folder):
    file = folder.create_file("a", b"data")
    sub = folder.create_subfolder("s")
    sub.create_file("inner", b"i")
    dest = folder.create_subfolder("dest")

    copied = file.copy(dest)
    assert copied.path == "/tmp/dest/a"
    assert copied.read() == b"data"
    assert file.path == "/tmp/a"

    copied_folder = sub.copy(dest)
    assert isinstance(copied_folder, Folder)
    assert copied_folder.file("inner").read() == b"i"

    with pytest.raises(CopyFailedError):
        file.copy(dest)


def test_write_bytes_and_text(folder: Folder):
    file = folder.create_file("file")
    file.write(b"New content")
    assert file.read() == b"New content"

    file.write("Nüe content")
    assert file.read() == "Nüe content".encode("utf-8")
    assert file.read_text() == "Nüe content"

    file.write("latin", encoding="latin-1")
    assert file.read_text(encoding="latin-1") == "latin"


def test_write_text_that_cannot_be_encoded(folder: Folder):
    file = folder.create_file("file")
    with pytest.raises(EncodingFailedError) as exc_info:
        file.write("snowman ☃", encoding="ascii")
    assert exc_info.value == EncodingFailedError(file, "ascii")

    with pytest.raises(EncodingFailedError):
        file.write("x", encoding="no-such-codec")
    assert file.read() == b""


def test_write_never_recreates_deleted_file(folder: Folder):
    file = folder.create_file("file")
    file.delete()
    with pytest.raises(WriteFailedError) as exc_info:
        file.write(b"zombie")
    assert exc_info.value == WriteFailedError(file)
    assert not folder.contains_file("file")


def test_append(folder: Folder):
    file = folder.create_file("log", b"a")
    file.append(b"b")
    file.append("c")
    assert file.read() == b"abc"


def test_read_int_and_bad_text(folder: Folder):
    assert folder.create_file("n", b" 42\n").read_int() == 42
    with pytest.raises(ReadFailedError):
        folder.create_file("not-a-number", b"abc").read_int()
    with pytest.raises(ReadFailedError):
        folder.create_file("binary", b"\xff\xfe\xfa").read_text()


def test_parent(folder: Folder):
    assert folder.create_file("test").parent == folder
    sub = folder.create_subfolder("subfolder")
    assert sub.parent == folder
    assert sub.create_file("test").parent == sub


def test_root_parent_is_none(memfs: MemoryFilesystem):
    root = Folder("/", fs=memfs)
    assert root.parent is None
    assert root.path == "/"


def test_lookup_children(folder: Folder):
    folder.create_file("a")
    folder.create_subfolder("s")
    assert folder.file("a").path == "/tmp/a"
    assert folder.subfolder("s").path == "/tmp/s/"
    assert folder.contains_file("a") and not folder.contains_file("s")
    assert folder.contains_subfolder("s") and not folder.contains_subfolder("a")
    with pytest.raises(InvalidPathError) as exc_info:
        folder.file("s")
    assert exc_info.value == InvalidPathError("/tmp/s")


def test_empty_path_rejected(memfs: MemoryFilesystem):
    with pytest.raises(EmptyPathError):
        File("", fs=memfs)
    with pytest.raises(EmptyPathError):
        Folder("", fs=memfs)


def test_relative_path_is_fixed_at_construction(memfs: MemoryFilesystem):
    memfs.create_file("/work/file")
    file = File("file", fs=memfs)
    memfs.chdir("/tmp")
    assert file.path == "/work/file"
    with pytest.raises(InvalidPathError):
        File("file", fs=memfs)


def test_description_and_equality(folder: Folder, memfs: MemoryFilesystem):
    file = folder.create_file("file")
    sub = folder.create_subfolder("folder")
    assert str(file) == f"File(name: file, path: {folder.path}file)"
    assert str(sub) == f"Folder(name: folder, path: {folder.path}folder/)"
    assert repr(file) == "File('/tmp/file')"
    assert file == File("/tmp/file", fs=memfs)
    assert file != sub
    assert len({file, File("/tmp/file", fs=memfs)}) == 1


def test_exists_and_modification_date(folder: Folder):
    file = folder.create_file("file")
    assert file.exists()
    assert file.modification_date is not None
    file.delete()
    assert not file.exists()
    assert file.modification_date is None


def test_empty_respects_hidden_flag(folder: Folder):
    folder.create_file("a")
    folder.create_file(".hidden")
    folder.create_subfolder("s").create_file("x")
    folder.create_subfolder(".git")

    folder.empty()
    assert folder.make_file_sequence(include_hidden=True).names() == [".hidden"]
    assert folder.make_subfolder_sequence(include_hidden=True).names() == [".git"]

    folder.empty(include_hidden=True)
    assert folder.make_file_sequence(include_hidden=True).count() == 0
    assert folder.make_subfolder_sequence(include_hidden=True).count() == 0
    # emptying an empty folder is fine
    folder.empty()


def test_move_contents(folder: Folder):
    src = folder.create_subfolder("src")
    dest = folder.create_subfolder("dest")
    src.create_file("a")
    src.create_file(".hidden")
    src.create_subfolder("s")

    src.move_contents(dest)
    assert dest.files.names() == ["a"]
    assert dest.subfolders.names() == ["s"]
    assert src.make_file_sequence(include_hidden=True).names() == [".hidden"]


def test_store_that_reports_nothing_rejects_lookups():
    class BlindFilesystem(MemoryFilesystem):
        no_files_exist = False

        def exists(self, path: str) -> EntryKind:
            if self.no_files_exist:
                return EntryKind.NOT_FOUND
            return super().exists(path)

    fs = BlindFilesystem()
    sub = Folder("/tmp", fs=fs).create_subfolder("folder")
    file = sub.create_file("file")
    assert file.read() == b""

    fs.no_files_exist = True
    with pytest.raises(InvalidPathError) as exc_info:
        sub.file("file")
    assert exc_info.value == InvalidPathError(file.path)


def test_names_with_trailing_whitespace_are_kept(folder: Folder):
    file = folder.create_file("notes ")
    assert file.path == folder.path + "notes "
    assert file.name == "notes "
    file.write(b"kept")
    assert file.read() == b"kept"

    sub = folder.create_subfolder("dir ")
    assert sub.path == folder.path + "dir /"


def test_rename_refuses_names_with_separators(folder: Folder):
    folder.create_subfolder("sub")
    file = folder.create_file("a.txt")
    with pytest.raises(RenameFailedError) as exc_info:
        file.rename("sub/x")
    assert exc_info.value == RenameFailedError(file)
    assert file.path == "/tmp/a.txt"
    assert folder.subfolder("sub").files.count() == 0
