"""
Filesystem Factory for creating filesystem adapters.
Implements Factory Pattern for plug-and-play filesystem support.
"""
import os
from pathlib import Path
from typing import Optional

from .base import FileSystemInterface
from .local_filesystem import LocalFileSystem
from .memory_filesystem import MemoryFileSystem
from ...core.logging_config import get_logger

logger = get_logger(__name__)

class FileSystemFactory:
    """
    Factory for creating filesystem adapters.
    Supports the local disk and an in-memory filesystem.
    """
    
    @staticmethod
    def create(filesystem_type: Optional[str] = None, **kwargs) -> FileSystemInterface:
        """
        Create a filesystem adapter instance.
        
        Args:
            filesystem_type: Type of filesystem ('local', 'memory', or None for auto-detect)
            **kwargs: Additional arguments for specific adapters
        
        Returns:
            FileSystemInterface instance
        
        Examples:
            # Local filesystem
            fs = FileSystemFactory.create('local', base_dir=Path('data'))
            
            # In-memory (tests, demos)
            fs = FileSystemFactory.create('memory')
        """
        if filesystem_type is None:
            filesystem_type = os.getenv("FILESYSTEM_TYPE", "local")
        
        filesystem_type = filesystem_type.lower()
        
        if filesystem_type == "local":
            return FileSystemFactory._create_local(**kwargs)
        elif filesystem_type == "memory":
            return MemoryFileSystem()
        else:
            raise ValueError(
                f"Unsupported filesystem type: {filesystem_type}. "
                f"Supported types: 'local', 'memory'"
            )
    
    @staticmethod
    def _create_local(**kwargs) -> LocalFileSystem:
        """Create local filesystem adapter."""
        base_dir = kwargs.get("base_dir")
        
        if base_dir is None:
            from ...core.config import PROJECTS_BASE_DIR
            base_dir = PROJECTS_BASE_DIR
        elif isinstance(base_dir, str):
            base_dir = Path(base_dir)
        
        return LocalFileSystem(base_dir=base_dir)
    
    @staticmethod
    async def create_and_initialize(filesystem_type: Optional[str] = None, **kwargs) -> FileSystemInterface:
        """
        Create filesystem adapter and initialize it.
        
        Args:
            filesystem_type: Type of filesystem
            **kwargs: Additional arguments
        
        Returns:
            Initialized FileSystemInterface instance
        """
        filesystem = FileSystemFactory.create(filesystem_type, **kwargs)
        await filesystem.initialize()
        logger.debug(f"Filesystem adapter ready: {type(filesystem).__name__}")
        return filesystem
