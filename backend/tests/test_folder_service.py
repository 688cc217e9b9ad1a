import pytest
from unittest.mock import AsyncMock

from folder_tree.api.exceptions import (
    CollisionError,
    CyclicMoveError,
    FolderNotFoundError,
    InvalidFolderNameError,
    PartialFailureError,
    ProjectNotFoundError,
)
from folder_tree.domain.value_objects import ItemType
from folder_tree.services.folder_service import is_valid_move_target
from folder_tree.services.tree_patcher import find_inconsistencies

from conftest import ROOT


# --- create -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_folder_at_root(folder_service, tree_paths):
    folder = await folder_service.create_folder(None, "Reports")

    assert folder.name == "Reports"
    assert folder.path == "Reports"
    assert folder.parent_path is None
    assert folder.children == []
    assert folder.is_expanded is False
    assert tree_paths() == ["Reports", "Reports/.folder"]


@pytest.mark.asyncio
async def test_create_folder_resolves_collisions_by_renaming_the_new_folder(folder_service, make_project):
    await make_project("Reports")

    first = await folder_service.create_folder(None, "Reports")
    second = await folder_service.create_folder(None, "Reports")

    assert first.path == "Reports-1"
    assert second.path == "Reports-2"
    assert await folder_service.detect_directory_type("Reports") == ItemType.PROJECT


@pytest.mark.asyncio
async def test_create_nested_folder(folder_service, make_folder):
    await make_folder("Work")

    folder = await folder_service.create_folder("Work", "2024")

    assert folder.path == "Work/2024"
    assert folder.parent_path == "Work"
    assert await folder_service.detect_directory_type("Work/2024") == ItemType.FOLDER


@pytest.mark.asyncio
async def test_create_folder_in_missing_parent(folder_service):
    with pytest.raises(FolderNotFoundError):
        await folder_service.create_folder("Nope", "Reports")


@pytest.mark.asyncio
async def test_create_folder_rejects_invalid_name(folder_service, tree_paths):
    with pytest.raises(InvalidFolderNameError):
        await folder_service.create_folder(None, "a/b")
    assert tree_paths() == []


# --- rename -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_rename_moves_nested_children(folder_service, make_folder, make_project, tree_paths):
    await make_folder("a")
    await make_folder("a/c")
    await make_project("a/c/p")

    folder = await folder_service.rename_folder("a", "b")

    assert folder.path == "b"
    assert folder.name == "b"
    assert folder.parent_path is None
    assert [child.path for child in folder.children] == ["b/c"]
    assert tree_paths() == [
        "b", "b/.folder", "b/c", "b/c/.folder", "b/c/p", "b/c/p/project.json"
    ]


@pytest.mark.asyncio
async def test_rename_nested_folder_keeps_parent(folder_service, make_folder):
    await make_folder("Work/Old")

    folder = await folder_service.rename_folder("Work/Old", "New")

    assert folder.path == "Work/New"
    assert folder.parent_path == "Work"


@pytest.mark.asyncio
async def test_rename_collision_is_reported(folder_service, make_folder, tree_paths):
    await make_folder("a")
    await make_folder("b")
    before = tree_paths()

    with pytest.raises(CollisionError):
        await folder_service.rename_folder("a", "b")
    assert tree_paths() == before


@pytest.mark.asyncio
async def test_rename_missing_folder(folder_service):
    with pytest.raises(FolderNotFoundError):
        await folder_service.rename_folder("ghost", "b")


@pytest.mark.asyncio
async def test_rename_to_same_name_is_a_no_op(folder_service, filesystem, make_folder):
    await make_folder("a")
    filesystem.rename_subtree = AsyncMock(wraps=filesystem.rename_subtree)

    folder = await folder_service.rename_folder("a", "a")

    assert folder.path == "a"
    filesystem.rename_subtree.assert_not_awaited()


# --- move -------------------------------------------------------------------

@pytest.mark.parametrize("source, target, expected", [
    ("a", None, True),
    ("a/b", None, True),
    ("a", "a", False),
    ("a", "a/b", False),
    ("a", "a/b/c", False),
    ("a", "ab", True),
    ("a", "b", True),
    ("a/b", "a", True),
])
def test_is_valid_move_target(source, target, expected):
    assert is_valid_move_target(source, target) is expected


@pytest.mark.asyncio
@pytest.mark.parametrize("target", ["a", "a/b", "a/b/c"])
async def test_move_folder_into_itself_is_rejected_without_mutation(folder_service, make_folder, tree_paths, target):
    await make_folder("a/b/c")
    before = tree_paths()

    with pytest.raises(CyclicMoveError, match="Cannot move a folder into itself or one of its subfolders"):
        await folder_service.move_folder("a", target)
    assert tree_paths() == before


@pytest.mark.asyncio
async def test_move_folder_with_subtree(folder_service, make_folder, make_project, tree_paths):
    await make_folder("a")
    await make_folder("a/c")
    await make_project("a/c/p")
    await make_folder("t")

    new_path = await folder_service.move_folder("a", "t")

    assert new_path == "t/a"
    assert "t/a/c/p/project.json" in tree_paths()
    assert "a" not in tree_paths()


@pytest.mark.asyncio
async def test_move_folder_to_root(folder_service, make_folder, tree_paths):
    await make_folder("t/a")

    assert await folder_service.move_folder("t/a", None) == "a"
    assert "a/.folder" in tree_paths()


@pytest.mark.asyncio
async def test_move_folder_to_current_parent_is_a_no_op(folder_service, filesystem, make_folder):
    await make_folder("t/a")
    filesystem.rename_subtree = AsyncMock(wraps=filesystem.rename_subtree)
    filesystem.exists = AsyncMock(wraps=filesystem.exists)

    assert await folder_service.move_folder("t/a", "t") == "t/a"
    filesystem.rename_subtree.assert_not_awaited()
    filesystem.exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_move_folder_collision_is_reported(folder_service, make_folder, tree_paths):
    await make_folder("a")
    await make_folder("t")
    await make_folder("t/a")
    before = tree_paths()

    with pytest.raises(CollisionError):
        await folder_service.move_folder("a", "t")
    assert tree_paths() == before


@pytest.mark.asyncio
async def test_move_folder_into_missing_target(folder_service, make_folder):
    await make_folder("a")

    with pytest.raises(FolderNotFoundError):
        await folder_service.move_folder("a", "ghost")


@pytest.mark.asyncio
async def test_move_project(folder_service, make_folder, make_project, tree_paths):
    await make_project("p")
    await make_folder("t")

    assert await folder_service.move_project("p", "t") == "t/p"
    assert await folder_service.move_project("t/p", None) == "p"
    assert "p/project.json" in tree_paths()


@pytest.mark.asyncio
async def test_move_project_to_current_parent_is_a_no_op(folder_service, make_project):
    await make_project("t/p")

    assert await folder_service.move_project("t/p", "t") == "t/p"


@pytest.mark.asyncio
async def test_move_project_requires_a_project(folder_service, make_folder):
    await make_folder("a")
    await make_folder("t")

    with pytest.raises(ProjectNotFoundError):
        await folder_service.move_project("a", "t")


# --- delete -----------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_promotes_children_to_parent(folder_service, make_folder, make_project, tree_paths):
    await make_folder("w/d")
    await make_folder("w/d/sub/deep")
    await make_project("w/d/p1")
    await make_project("w/d/sub/p2")

    moved = await folder_service.delete_folder("w/d")

    assert [(item.name, item.path, item.type) for item in moved] == [
        ("p1", "w/p1", ItemType.PROJECT),
        ("sub", "w/sub", ItemType.FOLDER),
    ]
    paths = tree_paths()
    assert "w/d" not in paths
    assert "w/p1/project.json" in paths
    assert "w/sub/p2/project.json" in paths
    assert "w/sub/deep/.folder" in paths


@pytest.mark.asyncio
async def test_delete_root_level_folder_promotes_to_root(folder_service, make_folder, make_project):
    await make_folder("d")
    await make_project("d/p")

    moved = await folder_service.delete_folder("d")

    assert [item.path for item in moved] == ["p"]
    assert [item.path for item in await folder_service.list_folder_contents(None)] == ["p"]


@pytest.mark.asyncio
async def test_delete_never_reduces_content(folder_service, make_folder, make_project):
    await make_folder("d")
    await make_folder("d/a")
    await make_folder("d/a/b")
    await make_project("d/a/p")
    await make_project("d/q")
    before = await folder_service.build_folder_tree()
    folders_before = len(before.folders)

    await folder_service.delete_folder("d")

    after = await folder_service.build_folder_tree()
    assert len(after.folders) == folders_before - 1
    assert sorted(item.path for item in after.root_items) == ["a", "q"]


@pytest.mark.asyncio
async def test_delete_empty_folder(folder_service, make_folder, tree_paths):
    await make_folder("keep")
    await make_folder("empty")

    assert await folder_service.delete_folder("empty") == []
    assert tree_paths() == ["keep", "keep/.folder"]


@pytest.mark.asyncio
async def test_delete_promotes_unmarked_directories(folder_service, filesystem, make_folder, tree_paths):
    await make_folder("d")
    await filesystem.create_directory(f"{ROOT}/d/loose")

    moved = await folder_service.delete_folder("d")

    assert [(item.path, item.type) for item in moved] == [("loose", ItemType.FOLDER)]
    assert "loose" in tree_paths()


@pytest.mark.asyncio
async def test_delete_with_name_clash_in_parent_changes_nothing(folder_service, make_folder, make_project, tree_paths):
    await make_folder("d")
    await make_project("d/a")
    await make_project("d/x")
    await make_project("x")
    before = tree_paths()

    with pytest.raises(CollisionError):
        await folder_service.delete_folder("d")
    assert tree_paths() == before


@pytest.mark.asyncio
async def test_delete_reports_partial_failure(folder_service, filesystem, make_folder, make_project):
    await make_folder("d")
    await make_project("d/a")
    await make_project("d/b")
    rename = filesystem.rename_subtree
    calls = []

    async def fail_second(old_path, new_path):
        calls.append(old_path)
        if len(calls) == 2:
            raise OSError("disk unplugged")
        await rename(old_path, new_path)

    filesystem.rename_subtree = fail_second

    with pytest.raises(PartialFailureError) as excinfo:
        await folder_service.delete_folder("d")

    assert [item.path for item in excinfo.value.completed] == ["a"]
    assert await folder_service.detect_directory_type("a") == ItemType.PROJECT
    assert await folder_service.detect_directory_type("d/b") == ItemType.PROJECT


@pytest.mark.asyncio
async def test_delete_lets_a_child_take_the_folder_name(folder_service, make_folder, make_project, tree_paths):
    await make_folder("a")
    await make_folder("a/a")
    await make_project("a/a/p")
    await make_project("a/q")

    moved = await folder_service.delete_folder("a")

    assert [(item.path, item.type) for item in moved] == [("a", ItemType.FOLDER), ("q", ItemType.PROJECT)]
    assert tree_paths() == ["a", "a/.folder", "a/p", "a/p/project.json", "q", "q/project.json"]


@pytest.mark.asyncio
async def test_delete_failing_after_moving_folder_aside_is_partial(folder_service, filesystem, make_folder):
    await make_folder("a")
    await make_folder("a/a")
    rename = filesystem.rename_subtree
    calls = []

    async def fail_promotion(old_path, new_path):
        calls.append(old_path)
        if len(calls) == 2:
            raise OSError("disk unplugged")
        await rename(old_path, new_path)

    filesystem.rename_subtree = fail_promotion

    with pytest.raises(PartialFailureError) as excinfo:
        await folder_service.delete_folder("a")

    assert excinfo.value.completed == []
    assert await folder_service.detect_directory_type(".a-deleting/a") == ItemType.FOLDER


@pytest.mark.asyncio
async def test_delete_missing_folder(folder_service):
    with pytest.raises(FolderNotFoundError):
        await folder_service.delete_folder("ghost")


# --- listing ----------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_folders_before_projects_sorted_by_name(folder_service, filesystem, make_folder, make_project):
    await make_project("zeta")
    await make_project("Alpha")
    await make_folder("mid")
    await make_folder("Beta")
    await filesystem.create_directory(f"{ROOT}/unmarked")
    await make_folder(".hidden")
    await filesystem.write_marker_file(ROOT, "notes.txt")

    items = await folder_service.list_folder_contents(None)

    assert [(item.type, item.name) for item in items] == [
        (ItemType.FOLDER, "Beta"),
        (ItemType.FOLDER, "mid"),
        (ItemType.PROJECT, "Alpha"),
        (ItemType.PROJECT, "zeta"),
    ]


@pytest.mark.asyncio
async def test_list_nested_folder_ignores_cached_children(folder_service, make_folder, make_project):
    await make_folder("w")
    folder = await folder_service.build_folder("w")
    assert folder.children == []

    await make_project("w/p")

    items = await folder_service.list_folder_contents("w")
    assert [item.path for item in items] == ["w/p"]


@pytest.mark.asyncio
async def test_list_missing_folder(folder_service):
    with pytest.raises(FolderNotFoundError):
        await folder_service.list_folder_contents("ghost")


@pytest.mark.asyncio
async def test_build_folder_tree_loads_every_folder(folder_service, make_folder, make_project):
    await make_folder("a")
    await make_folder("a/b")
    await make_folder("a/b/c")
    await make_project("a/b/p")
    await make_project("top")

    tree = await folder_service.build_folder_tree()

    assert [item.path for item in tree.root_items] == ["a", "top"]
    assert set(tree.folders) == {"a", "a/b", "a/b/c"}
    assert tree.folders["a/b"].parent_path == "a"
    assert [child.path for child in tree.folders["a/b"].children] == ["a/b/c", "a/b/p"]
    assert find_inconsistencies(tree) == []


@pytest.mark.asyncio
async def test_load_folder_in_tree_keeps_identity_and_expansion(folder_service, make_folder, make_project):
    await make_folder("a")
    tree = await folder_service.build_folder_tree()
    tree.folders["a"].is_expanded = True
    original_id = tree.folders["a"].id

    await make_folder("a/new")
    await make_project("a/p")
    reloaded = await folder_service.load_folder_in_tree(tree, "a")

    assert reloaded.folders["a"].id == original_id
    assert reloaded.folders["a"].is_expanded is True
    assert [child.path for child in reloaded.folders["a"].children] == ["a/new", "a/p"]
    assert "a/new" in reloaded.folders
    assert "a/new" not in tree.folders


@pytest.mark.asyncio
async def test_load_folder_in_tree_rejects_projects(folder_service, make_project):
    await make_project("proj")
    tree = await folder_service.build_folder_tree()

    with pytest.raises(FolderNotFoundError):
        await folder_service.load_folder_in_tree(tree, "proj")
    assert "proj" not in tree.folders
