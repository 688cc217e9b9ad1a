"""
Validation utilities - Pure validation functions.
"""
from ..api.exceptions import InvalidFolderNameError

INVALID_NAME_CHARS = ['/', '\\', ':', '*', '?', '"', '<', '>', '|']


def validate_folder_name(name: str) -> str:
    """
    Validate a folder name and return it stripped of surrounding whitespace.
    
    Raises:
        InvalidFolderNameError: If folder name is invalid
    """
    name = name.strip()
    if not name:
        raise InvalidFolderNameError("Folder name cannot be empty")
    
    found_chars = [char for char in INVALID_NAME_CHARS if char in name]
    if found_chars:
        raise InvalidFolderNameError(f"Folder name cannot contain: {', '.join(found_chars)}")
    
    # Hidden entries are skipped by listings and would vanish from the tree
    if name.startswith('.'):
        raise InvalidFolderNameError("Folder name cannot start with '.'")
    
    return name
