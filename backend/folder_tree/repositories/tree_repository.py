"""
Tree Repository - Concrete implementations of folder tree persistence.
"""
import json
import asyncio
from pathlib import Path
from threading import Lock
from typing import Optional

from .interfaces import ITreeRepository
from ..domain.entities import FolderTree
from ..services.tree_serializer import (
    decode_folder_tree,
    deserialize_folder_tree,
    encode_folder_tree,
    serialize_folder_tree,
)
from ..core.logging_config import get_logger

logger = get_logger(__name__)

class JSONTreeRepository(ITreeRepository):
    """
    JSON file-based tree repository.
    The whole tree is one document; data persists between restarts.
    """
    
    def __init__(self, data_file: Optional[Path] = None):
        """
        Initialize JSON repository.
        
        Args:
            data_file: JSON document path (defaults to TREE_DB_PATH)
        """
        if data_file is None:
            from ..core.config import TREE_DB_PATH
            data_file = TREE_DB_PATH
        
        self.data_file = Path(data_file)
        
        # Lock for thread-safe file operations
        self._lock = Lock()
    
    async def load(self) -> Optional[FolderTree]:
        """Load the tree from the JSON document."""
        def _load() -> Optional[str]:
            with self._lock:
                if not self.data_file.exists():
                    return None
                return self.data_file.read_text(encoding='utf-8')
        
        loop = asyncio.get_event_loop()
        text = await loop.run_in_executor(None, _load)
        if text is None:
            return None
        
        try:
            return decode_folder_tree(text)
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning(f"Could not load {self.data_file.name}, ignoring it: {e}")
            return None
    
    async def save(self, tree: FolderTree) -> None:
        """Write the tree to the JSON document."""
        text = encode_folder_tree(tree)
        
        def _save():
            with self._lock:
                self.data_file.parent.mkdir(parents=True, exist_ok=True)
                # Write then swap so a crash never leaves a truncated document
                tmp_file = self.data_file.with_suffix(self.data_file.suffix + ".tmp")
                tmp_file.write_text(text, encoding='utf-8')
                tmp_file.replace(self.data_file)
        
        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, _save)
    
    async def clear(self) -> None:
        """Delete the JSON document."""
        def _clear():
            with self._lock:
                self.data_file.unlink(missing_ok=True)

        loop = asyncio.get_event_loop()
        await loop.run_in_executor(None, _clear)

class MemoryTreeRepository(ITreeRepository):
    """
    In-memory tree repository - perfect for demos and testing.
    Stores the plain document so callers never share mutable state with it.
    """
    
    def __init__(self):
        self._document: Optional[dict] = None
    
    async def load(self) -> Optional[FolderTree]:
        if self._document is None:
            return None
        return deserialize_folder_tree(json.loads(json.dumps(self._document)))
    
    async def save(self, tree: FolderTree) -> None:
        self._document = json.loads(json.dumps(serialize_folder_tree(tree)))
    
    async def clear(self) -> None:
        self._document = None

class TreeRepositoryFactory:
    """Factory for creating tree repositories ('json' or 'memory')."""
    
    @staticmethod
    def create(store_type: Optional[str] = None, **kwargs) -> ITreeRepository:
        if store_type is None:
            from ..core.config import TREE_STORE_TYPE
            store_type = TREE_STORE_TYPE
        
        store_type = store_type.lower()
        
        if store_type == "json":
            return JSONTreeRepository(data_file=kwargs.get("data_file"))
        elif store_type == "memory":
            return MemoryTreeRepository()
        else:
            raise ValueError(
                f"Unsupported tree store type: {store_type}. "
                f"Supported types: 'json', 'memory'"
            )
