"""
Abstract base class for filesystem adapters.
All filesystem implementations must inherit from this class.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from ...domain.value_objects import FOLDER_MARKER_FILE
from ...core.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DirEntry:
    """A single directory listing entry."""
    name: str
    is_directory: bool


class FileSystemInterface(ABC):
    """
    Abstract interface for the filesystem operations the folder tree relies on.
    Paths are `/`-joined and relative to the adapter's own base location;
    the empty string addresses the base itself.

    Adapters signal failures with the built-in OS errors:
    FileNotFoundError, FileExistsError and NotADirectoryError.
    """
    
    @abstractmethod
    async def exists(self, path: str) -> bool:
        """
        Check whether a file or directory exists.
        
        Args:
            path: Relative path to check
        
        Returns:
            True if something exists at path, False otherwise
        """
        pass
    
    @abstractmethod
    async def create_directory(self, path: str, parents: bool = False) -> None:
        """
        Create a directory.
        
        Args:
            path: Relative path of the new directory
            parents: Create missing parent directories as well
        
        Raises:
            FileNotFoundError: If the parent is absent and parents is False
            FileExistsError: If something already exists at path
        """
        pass
    
    @abstractmethod
    async def write_marker_file(self, path: str, marker: str = FOLDER_MARKER_FILE) -> None:
        """
        Create a zero-byte marker file inside the directory at path.
        
        Args:
            path: Relative path of the directory
            marker: Marker file name (folder marker by default)
        """
        pass
    
    @abstractmethod
    async def list_entries(self, path: str) -> List[DirEntry]:
        """
        List the direct entries of a directory, ordered by name.
        
        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If path is a file
        """
        pass
    
    @abstractmethod
    async def rename_subtree(self, old_path: str, new_path: str) -> None:
        """
        Move old_path and everything nested under it to new_path in one step.
        
        Raises:
            FileNotFoundError: If old_path is absent or new_path's parent is absent
            FileExistsError: If new_path is already occupied
        """
        pass
    
    @abstractmethod
    async def remove_subtree(self, path: str) -> None:
        """
        Recursively delete path.
        
        Raises:
            FileNotFoundError: If path is absent
        """
        pass
    
    @abstractmethod
    async def initialize(self):
        """Initialize the filesystem (create base directory, etc.)."""
        pass
    
    @abstractmethod
    async def close(self):
        """Release any resources held by the adapter."""
        pass
