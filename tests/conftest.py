from pathlib import Path

import pytest

from folio.adapters.local_fs import LocalFilesystem
from folio.adapters.memory_fs import MemoryFilesystem
from folio.domain.items import Folder


@pytest.fixture
def memfs() -> MemoryFilesystem:
    return MemoryFilesystem(cwd="/work", home="/home/user", temp="/tmp")


@pytest.fixture
def folder(memfs: MemoryFilesystem) -> Folder:
    """An empty folder in a fresh in-memory store."""
    return Folder("/tmp", fs=memfs)


@pytest.fixture
def disk_folder(tmp_path: Path) -> Folder:
    """An empty folder on the real disk."""
    return Folder(str(tmp_path), fs=LocalFilesystem())
