"""
Utility functions - Pure functions with no dependencies.
These can be used across all layers.
"""
from .path_utils import (
    join,
    parent_of,
    name_of,
    is_ancestor_or_self,
    replace_prefix,
    normalize_folder_path
)
from .validators import validate_folder_name

__all__ = [
    "join",
    "parent_of",
    "name_of",
    "is_ancestor_or_self",
    "replace_prefix",
    "normalize_folder_path",
    "validate_folder_name"
]
