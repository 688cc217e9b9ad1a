import json

from folder_tree.domain.entities import Folder, FolderItem, FolderTree
from folder_tree.domain.value_objects import ItemType
from folder_tree.services.tree_serializer import (
    decode_folder_tree,
    deserialize_folder_tree,
    encode_folder_tree,
    serialize_folder_tree,
)


def _sample_tree():
    report = FolderItem(type=ItemType.PROJECT, id="p1", name="Report", path="Work/Report")
    work = Folder(id="f1", name="Work", path="Work", parent_path=None, children=[report], is_expanded=True)
    return FolderTree(
        root_items=[
            work.to_item(),
            FolderItem(type=ItemType.PROJECT, id="p2", name="zzz", path="zzz"),
            FolderItem(type=ItemType.PROJECT, id="p3", name="Ärger", path="Ärger"),
        ],
        folders={"Work": work},
    )


def test_serialized_document_uses_persisted_field_names():
    document = serialize_folder_tree(_sample_tree())

    assert set(document) == {"rootItems", "folders"}
    assert document["folders"]["Work"] == {
        "id": "f1",
        "name": "Work",
        "path": "Work",
        "parentPath": None,
        "children": [{"type": "project", "id": "p1", "name": "Report", "path": "Work/Report"}],
        "isExpanded": True,
    }
    assert document["rootItems"][0]["type"] == "folder"


def test_round_trip_through_json_text():
    tree = _sample_tree()

    text = encode_folder_tree(tree)

    assert "Ärger" in text
    assert decode_folder_tree(text) == tree
    assert json.loads(text) == serialize_folder_tree(tree)


def test_root_item_order_is_preserved():
    tree = _sample_tree()
    tree.root_items.reverse()

    restored = deserialize_folder_tree(serialize_folder_tree(tree))

    assert [item.path for item in restored.root_items] == ["Ärger", "zzz", "Work"]


def test_missing_optional_fields_use_defaults():
    restored = deserialize_folder_tree({
        "folders": {"a": {"id": "x", "name": "a", "path": "a"}}
    })

    assert restored.root_items == []
    assert restored.folders["a"].parent_path is None
    assert restored.folders["a"].children == []
    assert restored.folders["a"].is_expanded is False
