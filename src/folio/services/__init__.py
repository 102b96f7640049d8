from .filesystem_service import FileSystem


__all__ = [
    'FileSystem',
]
