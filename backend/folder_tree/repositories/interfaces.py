"""
Repository interfaces - Define contracts for data access.
"""
from abc import ABC, abstractmethod
from typing import Optional
from ..domain.entities import FolderTree

class ITreeRepository(ABC):
    """
    Interface for persisting the folder tree document.
    Business logic depends on this interface, not concrete implementations.
    """
    
    @abstractmethod
    async def load(self) -> Optional[FolderTree]:
        """Load the persisted tree, or None if nothing was saved yet."""
        pass
    
    @abstractmethod
    async def save(self, tree: FolderTree) -> None:
        """Persist the tree, replacing any previous document."""
        pass
    
    @abstractmethod
    async def clear(self) -> None:
        """Forget the persisted tree."""
        pass
