"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import Folder, FolderItem, FolderTree, SearchResult, generate_id
from .value_objects import (
    FOLDER_MARKER_FILE,
    PROJECT_JSON_FILE,
    FolderPath,
    ItemPath,
    ItemType,
)

__all__ = [
    "Folder",
    "FolderItem",
    "FolderTree",
    "SearchResult",
    "generate_id",
    "FolderPath",
    "ItemPath",
    "ItemType",
    "FOLDER_MARKER_FILE",
    "PROJECT_JSON_FILE",
]
