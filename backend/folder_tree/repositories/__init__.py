"""
Repository layer - persistence of the folder tree document.
"""
from .interfaces import ITreeRepository
from .tree_repository import JSONTreeRepository, MemoryTreeRepository, TreeRepositoryFactory

__all__ = [
    "ITreeRepository",
    "JSONTreeRepository",
    "MemoryTreeRepository",
    "TreeRepositoryFactory"
]
