"""
Filesystem abstraction layer for plug-and-play filesystem support.
Folder operations run against this contract, never against the OS directly.
"""
from .base import DirEntry, FileSystemInterface
from .local_filesystem import LocalFileSystem
from .memory_filesystem import MemoryFileSystem
from .factory import FileSystemFactory

__all__ = [
    "DirEntry",
    "FileSystemInterface",
    "LocalFileSystem",
    "MemoryFileSystem",
    "FileSystemFactory"
]
