from .local_fs import LocalFilesystem
from .memory_fs import MemoryFilesystem

__all__ = ["LocalFilesystem", "MemoryFilesystem"]
