"""
Tree patcher - pure transformations over the folder arena.

The filesystem is the source of truth; after a mutating operation the
in-memory tree is brought back in line by one of these functions. None of
them mutates its input: each returns a new FolderTree.
"""
from dataclasses import replace
from typing import Iterable, List, Optional

from ..domain.entities import Folder, FolderItem, FolderTree, generate_id
from ..domain.value_objects import ItemType
from ..utils.path_utils import is_ancestor_or_self, join, name_of, parent_of, replace_prefix
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def folder_item_sort_key(item: FolderItem):
    """Folders before projects, then by name (case-folded first, exact name as tie-break)."""
    return (0 if item.type == ItemType.FOLDER else 1, item.name.casefold(), item.name)


def sort_folder_items(items: Iterable[FolderItem]) -> List[FolderItem]:
    return sorted(items, key=folder_item_sort_key)


def _rewrite_item(item: FolderItem, old_prefix: str, new_prefix: str) -> FolderItem:
    if not is_ancestor_or_self(old_prefix, item.path):
        return item
    new_path = replace_prefix(item.path, old_prefix, new_prefix)
    return replace(item, path=new_path, name=name_of(new_path))


def rewrite_prefix(tree: FolderTree, old_prefix: str, new_prefix: str) -> FolderTree:
    """
    Re-root every path under `old_prefix` onto `new_prefix`.

    Folder keys, paths, names and parent paths are recomputed together, as are
    the paths of every child reference and root item. Containers are not
    changed: an item stays in the list it was in.
    """
    folders = {}
    for key, folder in tree.folders.items():
        children = [_rewrite_item(child, old_prefix, new_prefix) for child in folder.children]
        if is_ancestor_or_self(old_prefix, key):
            new_path = replace_prefix(key, old_prefix, new_prefix)
            folder = replace(
                folder,
                path=new_path,
                name=name_of(new_path),
                parent_path=parent_of(new_path),
                children=children
            )
        else:
            folder = replace(folder, children=children)
        folders[replace_prefix(key, old_prefix, new_prefix)] = folder

    root_items = [_rewrite_item(item, old_prefix, new_prefix) for item in tree.root_items]
    return FolderTree(root_items=root_items, folders=folders)


def find_item(tree: FolderTree, item_path: str) -> Optional[FolderItem]:
    """Find the reference to `item_path` in its parent's container, if loaded."""
    parent = parent_of(item_path)
    if parent is None:
        container = tree.root_items
    else:
        parent_folder = tree.folders.get(parent)
        container = parent_folder.children if parent_folder else []
    return next((item for item in container if item.path == item_path), None)


def remove_item(tree: FolderTree, item_path: str) -> FolderTree:
    """Drop the reference to `item_path` from its parent's container."""
    parent = parent_of(item_path)
    folders = dict(tree.folders)
    root_items = list(tree.root_items)

    if parent is None:
        root_items = [item for item in root_items if item.path != item_path]
    elif parent in folders:
        parent_folder = folders[parent]
        folders[parent] = replace(
            parent_folder,
            children=[child for child in parent_folder.children if child.path != item_path]
        )

    return FolderTree(root_items=root_items, folders=folders)


def add_item(tree: FolderTree, item: FolderItem) -> FolderTree:
    """
    Add a reference to its parent's container, keeping the container sorted.
    A parent folder that is not loaded is left alone.
    """
    parent = parent_of(item.path)
    folders = dict(tree.folders)
    root_items = list(tree.root_items)

    if parent is None:
        root_items = sort_folder_items(
            [existing for existing in root_items if existing.path != item.path] + [item]
        )
    elif parent in folders:
        parent_folder = folders[parent]
        folders[parent] = replace(
            parent_folder,
            children=sort_folder_items(
                [child for child in parent_folder.children if child.path != item.path] + [item]
            )
        )

    return FolderTree(root_items=root_items, folders=folders)


def insert_folder(tree: FolderTree, folder: Folder) -> FolderTree:
    """Register a newly created folder in the arena and in its parent's container."""
    patched = add_item(tree, folder.to_item())
    patched.folders[folder.path] = folder
    return patched


def relocate_item(tree: FolderTree, old_path: str, new_path: str, item_type: ItemType) -> FolderTree:
    """
    Patch the tree after a rename or move of `old_path` to `new_path`.

    The reference leaves its old container, every path under `old_path` is
    rewritten, and the reference joins the new container.
    """
    if old_path == new_path:
        return tree

    existing = find_item(tree, old_path)
    if existing is None:
        arena_folder = tree.folders.get(old_path)
        item_id = arena_folder.id if arena_folder else generate_id()
        existing = FolderItem(type=item_type, id=item_id, name=name_of(old_path), path=old_path)

    patched = remove_item(tree, old_path)
    patched = rewrite_prefix(patched, old_path, new_path)
    return add_item(patched, replace(existing, path=new_path, name=name_of(new_path)))


def promote_children(tree: FolderTree, folder_path: str, moved_items: List[FolderItem]) -> FolderTree:
    """
    Patch the tree after deleting `folder_path` whose children were promoted.

    `moved_items` are the promoted children at their new paths. A child named
    like the deleted folder is rewritten last: its descendants take over the
    deleted folder's prefix, which must no longer be shared with its siblings.
    """
    patched = remove_item(tree, folder_path)
    patched.folders.pop(folder_path, None)

    folder_name = name_of(folder_path)
    ordered = sorted(moved_items, key=lambda moved: moved.name == folder_name)
    for moved in ordered:
        old_path = join(folder_path, moved.name)
        patched = rewrite_prefix(patched, old_path, moved.path)
        patched = add_item(patched, moved)

    return patched


def find_inconsistencies(tree: FolderTree) -> List[str]:
    """
    Report every place where a path, a map key and a structural position disagree.
    An empty list means the tree is consistent.
    """
    problems = []

    for key, folder in tree.folders.items():
        if key != folder.path:
            problems.append(f"Folder key '{key}' does not match its path '{folder.path}'")
        if folder.name != name_of(folder.path):
            problems.append(f"Folder '{folder.path}' has name '{folder.name}'")
        if folder.parent_path != parent_of(folder.path):
            problems.append(f"Folder '{folder.path}' has parent path '{folder.parent_path}'")
        for child in folder.children:
            if parent_of(child.path) != folder.path:
                problems.append(f"Child '{child.path}' is not directly under '{folder.path}'")
            if child.name != name_of(child.path):
                problems.append(f"Child '{child.path}' has name '{child.name}'")

    for item in tree.root_items:
        if parent_of(item.path) is not None:
            problems.append(f"Root item '{item.path}' is not at root level")
        if item.name != name_of(item.path):
            problems.append(f"Root item '{item.path}' has name '{item.name}'")

    # Every folder reachable from the root must be loaded in the arena
    pending = [item for item in tree.root_items if item.is_folder()]
    seen = set()
    while pending:
        item = pending.pop()
        if item.path in seen:
            continue
        seen.add(item.path)
        folder = tree.folders.get(item.path)
        if folder is None:
            problems.append(f"Folder '{item.path}' is referenced but not loaded")
            continue
        pending.extend(child for child in folder.children if child.is_folder())

    return problems
