"""
Tree serialization - converts a FolderTree to and from the plain document
that is persisted (`rootItems` + path-keyed `folders`).
"""
import json
from typing import Any, Dict

from ..domain.entities import Folder, FolderItem, FolderTree
from ..domain.value_objects import ItemType


def _item_to_dict(item: FolderItem) -> Dict[str, Any]:
    return {
        "type": item.type.value,
        "id": item.id,
        "name": item.name,
        "path": item.path
    }


def _item_from_dict(data: Dict[str, Any]) -> FolderItem:
    return FolderItem(
        type=ItemType(data["type"]),
        id=data["id"],
        name=data["name"],
        path=data["path"]
    )


def _folder_to_dict(folder: Folder) -> Dict[str, Any]:
    return {
        "id": folder.id,
        "name": folder.name,
        "path": folder.path,
        "parentPath": folder.parent_path,
        "children": [_item_to_dict(child) for child in folder.children],
        "isExpanded": folder.is_expanded
    }


def _folder_from_dict(data: Dict[str, Any]) -> Folder:
    return Folder(
        id=data["id"],
        name=data["name"],
        path=data["path"],
        parent_path=data.get("parentPath"),
        children=[_item_from_dict(child) for child in data.get("children", [])],
        is_expanded=bool(data.get("isExpanded", False))
    )


def serialize_folder_tree(tree: FolderTree) -> Dict[str, Any]:
    """Serialize a FolderTree to a plain dict; root item order is kept."""
    return {
        "rootItems": [_item_to_dict(item) for item in tree.root_items],
        "folders": {path: _folder_to_dict(folder) for path, folder in tree.folders.items()}
    }


def deserialize_folder_tree(data: Dict[str, Any]) -> FolderTree:
    """Rebuild a FolderTree from the plain dict produced by serialize_folder_tree."""
    return FolderTree(
        root_items=[_item_from_dict(item) for item in data.get("rootItems", [])],
        folders={path: _folder_from_dict(folder) for path, folder in data.get("folders", {}).items()}
    )


def encode_folder_tree(tree: FolderTree) -> str:
    """Serialize a FolderTree to JSON text."""
    return json.dumps(serialize_folder_tree(tree), indent=2, ensure_ascii=False)


def decode_folder_tree(text: str) -> FolderTree:
    """Parse JSON text produced by encode_folder_tree."""
    return deserialize_folder_tree(json.loads(text))
