"""
Domain entities - Core business objects.
These represent the folder hierarchy, not its persisted form.
"""
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from .value_objects import FolderPath, ItemPath, ItemType, PATH_SEPARATOR


@dataclass
class FolderItem:
    """
    Reference to a folder or project placed under a folder.
    `path` is relative to the projects root and always ends with `name`.
    """
    type: ItemType
    id: str
    name: str
    path: ItemPath

    def is_folder(self) -> bool:
        return self.type == ItemType.FOLDER

    def is_project(self) -> bool:
        return self.type == ItemType.PROJECT


@dataclass
class Folder:
    """
    Folder entity - a directory-backed node of the hierarchy.

    `children` is a cache of the last listing; it may lag the filesystem.
    `is_expanded` is UI state and is carried through untouched.
    """
    id: str
    name: str
    path: FolderPath
    parent_path: Optional[FolderPath]
    children: List[FolderItem] = field(default_factory=list)
    is_expanded: bool = False

    def is_root(self) -> bool:
        """Check if folder sits directly under the projects root."""
        return self.parent_path is None

    def get_depth(self) -> int:
        """Get folder depth in hierarchy (root-level folders are 0)."""
        return self.path.count(PATH_SEPARATOR)

    def to_item(self) -> FolderItem:
        return FolderItem(type=ItemType.FOLDER, id=self.id, name=self.name, path=self.path)


@dataclass
class FolderTree:
    """
    The full hierarchy: root items plus an arena of loaded folders keyed by path.
    Children reference other folders by path; they never own them.
    """
    root_items: List[FolderItem] = field(default_factory=list)
    folders: Dict[str, Folder] = field(default_factory=dict)

    def get_folder(self, folder_path: str) -> Optional[Folder]:
        return self.folders.get(folder_path)


@dataclass
class SearchResult:
    """A project whose name matched a search query."""
    project: FolderItem
    folder_path: str
    matched_text: str


def generate_id() -> str:
    """Generate a unique id for folders and items."""
    return str(uuid.uuid4())
