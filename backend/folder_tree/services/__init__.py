"""
Service layer - folder tree operations, search, serialization and persistence glue.
"""
from .folder_service import FolderService, is_valid_move_target
from .name_resolver import generate_unique_name
from .search_service import SearchService
from .tree_service import TreeService
from .tree_serializer import (
    serialize_folder_tree,
    deserialize_folder_tree,
    encode_folder_tree,
    decode_folder_tree
)

__all__ = [
    "FolderService",
    "is_valid_move_target",
    "generate_unique_name",
    "SearchService",
    "TreeService",
    "serialize_folder_tree",
    "deserialize_folder_tree",
    "encode_folder_tree",
    "decode_folder_tree"
]
