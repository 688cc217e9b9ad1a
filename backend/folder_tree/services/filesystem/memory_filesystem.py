"""
In-memory filesystem adapter implementing FileSystemInterface.
Perfect for demos and testing - the whole hierarchy lives in Python sets and dicts.
Data is lost when the application restarts.
"""
from typing import Dict, List, Set

from .base import DirEntry, FileSystemInterface
from ...domain.value_objects import FOLDER_MARKER_FILE, PATH_SEPARATOR
from ...utils.path_utils import is_ancestor_or_self, join, parent_of, replace_prefix
from ...core.logging_config import get_logger

logger = get_logger(__name__)

# The base location is addressed by the empty path
BASE = ""

class MemoryFileSystem(FileSystemInterface):
    """
    In-memory filesystem adapter.
    Directories are a set of paths, files a dict of path -> content.
    """
    
    def __init__(self):
        self._directories: Set[str] = {BASE}
        self._files: Dict[str, str] = {}
    
    async def initialize(self):
        """Initialize filesystem (base directory always exists)."""
        self._directories.add(BASE)
    
    async def close(self):
        """Close filesystem (no-op for in-memory)."""
        pass
    
    @staticmethod
    def _normalize(path: str) -> str:
        return path.strip(PATH_SEPARATOR)
    
    def _parent_dir(self, path: str) -> str:
        return parent_of(path) or BASE
    
    def _exists(self, path: str) -> bool:
        return path in self._directories or path in self._files
    
    def _under(self, path: str, candidate: str) -> bool:
        if path == BASE:
            return True
        return is_ancestor_or_self(path, candidate)
    
    async def exists(self, path: str) -> bool:
        return self._exists(self._normalize(path))
    
    async def create_directory(self, path: str, parents: bool = False) -> None:
        path = self._normalize(path)
        if self._exists(path):
            raise FileExistsError(f"Path already exists: {path}")
        
        parent = self._parent_dir(path)
        if parent not in self._directories:
            if not parents:
                raise FileNotFoundError(f"Parent directory not found: {parent}")
            await self.create_directory(parent, parents=True)
        
        self._directories.add(path)
    
    async def write_marker_file(self, path: str, marker: str = FOLDER_MARKER_FILE) -> None:
        path = self._normalize(path)
        if path not in self._directories:
            raise FileNotFoundError(f"Directory not found: {path}")
        self._files[join(path, marker)] = ""
    
    async def list_entries(self, path: str) -> List[DirEntry]:
        path = self._normalize(path)
        if path in self._files:
            raise NotADirectoryError(f"Not a directory: {path}")
        if path not in self._directories:
            raise FileNotFoundError(f"Directory not found: {path}")
        
        entries = [
            DirEntry(name=candidate.rsplit(PATH_SEPARATOR, 1)[-1], is_directory=is_dir)
            for candidates, is_dir in ((self._directories, True), (self._files, False))
            for candidate in candidates
            if candidate != BASE and self._parent_dir(candidate) == path
        ]
        return sorted(entries, key=lambda entry: entry.name)
    
    async def rename_subtree(self, old_path: str, new_path: str) -> None:
        old_path = self._normalize(old_path)
        new_path = self._normalize(new_path)
        
        if not self._exists(old_path):
            raise FileNotFoundError(f"Path not found: {old_path}")
        if self._exists(new_path):
            raise FileExistsError(f"Path already exists: {new_path}")
        if self._parent_dir(new_path) not in self._directories:
            raise FileNotFoundError(f"Parent directory not found: {new_path}")
        
        self._directories = {
            replace_prefix(directory, old_path, new_path) for directory in self._directories
        }
        self._files = {
            replace_prefix(file_path, old_path, new_path): content
            for file_path, content in self._files.items()
        }
    
    async def remove_subtree(self, path: str) -> None:
        path = self._normalize(path)
        if not self._exists(path):
            raise FileNotFoundError(f"Path not found: {path}")
        
        self._directories = {
            directory for directory in self._directories
            if directory == BASE or not self._under(path, directory)
        }
        self._files = {
            file_path: content for file_path, content in self._files.items()
            if not self._under(path, file_path)
        }
    
    def all_paths(self) -> List[str]:
        """Every directory and file path, sorted (handy for assertions)."""
        return sorted((self._directories | set(self._files)) - {BASE})
