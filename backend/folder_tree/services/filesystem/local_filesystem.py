"""
Local filesystem adapter implementing FileSystemInterface.
Folders and projects are real directories under a base directory.
"""
import shutil
import asyncio
from pathlib import Path, PurePosixPath
from typing import List, Optional

from .base import DirEntry, FileSystemInterface
from ...domain.value_objects import FOLDER_MARKER_FILE
from ...core.logging_config import get_logger

logger = get_logger(__name__)

class LocalFileSystem(FileSystemInterface):
    """
    Local filesystem adapter.
    Blocking calls run in the default executor to keep the event loop free.
    """
    
    def __init__(self, base_dir: Optional[Path] = None):
        """
        Initialize local filesystem.
        
        Args:
            base_dir: Base directory all paths are relative to (defaults to backend/data)
        """
        if base_dir is None:
            from ...core.config import PROJECTS_BASE_DIR
            base_dir = PROJECTS_BASE_DIR
        
        self.base_dir = Path(base_dir)
    
    async def initialize(self):
        """Initialize filesystem - ensure base directory exists."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
    
    async def close(self):
        """Close filesystem (no-op for local filesystem)."""
        pass
    
    def _get_full_path(self, path: str) -> Path:
        """Get full filesystem path from a relative path."""
        normalized = PurePosixPath(path.lstrip('/'))
        # Reject directory traversal out of the base directory
        if '..' in normalized.parts:
            raise ValueError(f"Path escapes base directory: {path}")
        return self.base_dir.joinpath(*normalized.parts)
    
    async def _run(self, func, *args):
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, func, *args)
    
    async def exists(self, path: str) -> bool:
        """Check if a file or directory exists."""
        return await self._run(self._get_full_path(path).exists)
    
    async def create_directory(self, path: str, parents: bool = False) -> None:
        """Create a directory, optionally with its parents."""
        full_path = self._get_full_path(path)
        
        def _mkdir():
            full_path.mkdir(parents=parents, exist_ok=False)
        
        await self._run(_mkdir)
    
    async def write_marker_file(self, path: str, marker: str = FOLDER_MARKER_FILE) -> None:
        """Create an empty marker file inside a directory."""
        marker_path = self._get_full_path(path) / marker
        
        def _write():
            marker_path.write_bytes(b"")
        
        await self._run(_write)
    
    async def list_entries(self, path: str) -> List[DirEntry]:
        """List direct entries of a directory."""
        full_path = self._get_full_path(path)
        
        def _list():
            return sorted(
                (DirEntry(name=child.name, is_directory=child.is_dir()) for child in full_path.iterdir()),
                key=lambda entry: entry.name
            )
        
        return await self._run(_list)
    
    async def rename_subtree(self, old_path: str, new_path: str) -> None:
        """Move a directory (with all of its contents) to a new path."""
        old_full_path = self._get_full_path(old_path)
        new_full_path = self._get_full_path(new_path)
        
        if not old_full_path.exists():
            raise FileNotFoundError(f"Path not found: {old_path}")
        # os.rename silently replaces empty directories on POSIX
        if new_full_path.exists():
            raise FileExistsError(f"Path already exists: {new_path}")
        if not new_full_path.parent.is_dir():
            raise FileNotFoundError(f"Parent directory not found: {new_path}")
        
        await self._run(old_full_path.rename, new_full_path)
    
    async def remove_subtree(self, path: str) -> None:
        """Recursively delete a directory or file."""
        full_path = self._get_full_path(path)
        
        if not full_path.exists():
            raise FileNotFoundError(f"Path not found: {path}")
        
        def _remove():
            if full_path.is_dir():
                shutil.rmtree(full_path)
            else:
                full_path.unlink()
        
        await self._run(_remove)
