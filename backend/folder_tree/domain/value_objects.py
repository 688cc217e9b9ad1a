"""
Value Objects - Immutable objects that represent domain concepts.
These have no identity and are compared by value.
"""
from enum import Enum
from typing import NewType

# Value objects for type safety and domain clarity
FolderPath = NewType("FolderPath", str)
ItemPath = NewType("ItemPath", str)

PATH_SEPARATOR = "/"

# Marker file that identifies a directory as a folder (not a project)
FOLDER_MARKER_FILE = ".folder"

# Project metadata file; only its presence matters here
PROJECT_JSON_FILE = "project.json"


class ItemType(str, Enum):
    """Kind of an entry placed under a folder."""
    FOLDER = "folder"
    PROJECT = "project"
