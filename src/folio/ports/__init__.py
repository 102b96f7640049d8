from .filesystem import Entry, EntryKind, FilesystemPort

__all__ = ["Entry", "EntryKind", "FilesystemPort"]
