"""
Folder Service - Business logic for folder tree operations.

Every operation is a sequence of filesystem calls against an injected
FileSystemInterface. Steps are not rolled back when a later step fails.
"""
from typing import List, Optional

from .interfaces import IFolderService
from .filesystem.base import FileSystemInterface
from .name_resolver import generate_unique_name
from .tree_patcher import sort_folder_items
from ..api.exceptions import (
    CollisionError,
    CyclicMoveError,
    FolderNotFoundError,
    FolderTreeError,
    NotFoundError,
    PartialFailureError,
    ProjectNotFoundError,
)
from ..domain.entities import Folder, FolderItem, FolderTree, generate_id
from ..domain.value_objects import FOLDER_MARKER_FILE, PROJECT_JSON_FILE, ItemType
from ..utils.path_utils import is_ancestor_or_self, join, name_of, parent_of
from ..utils.validators import validate_folder_name
from ..core.logging_config import get_logger

logger = get_logger(__name__)


def is_valid_move_target(source_path: str, target_path: Optional[str]) -> bool:
    """
    Check that moving `source_path` under `target_path` does not create a cycle.
    Moving to the root (None) is always valid.
    """
    if target_path is None:
        return True
    return not is_ancestor_or_self(source_path, target_path)


class FolderService(IFolderService):
    """
    Service for folder tree operations.
    Handles creation, renaming, moving, deletion with promotion and listing.
    """

    def __init__(self, filesystem: FileSystemInterface, root_dir: str = ""):
        """
        Initialize folder service.

        Args:
            filesystem: Filesystem adapter (dependency injection)
            root_dir: Projects root, relative to the filesystem's base
        """
        self._fs = filesystem
        self.root_dir = root_dir

    is_valid_move_target = staticmethod(is_valid_move_target)

    def _root(self, root_dir: Optional[str]) -> str:
        return self.root_dir if root_dir is None else root_dir

    def _full_path(self, path: Optional[str], root_dir: str) -> str:
        return join(root_dir, path) if path else root_dir

    async def ensure_root(self, root_dir: Optional[str] = None) -> None:
        """Create the projects root directory if it does not exist yet."""
        root = self._root(root_dir)
        if root and not await self._fs.exists(root):
            await self._fs.create_directory(root, parents=True)
            logger.info(f"Created projects root '{root}'")

    async def detect_directory_type(self, dir_path: Optional[str], root_dir: Optional[str] = None) -> Optional[ItemType]:
        """
        Classify a directory by its marker file.

        Returns:
            ItemType.FOLDER if it holds the folder marker, ItemType.PROJECT if it
            holds project.json, None otherwise
        """
        full_path = self._full_path(dir_path, self._root(root_dir))

        if await self._fs.exists(join(full_path, FOLDER_MARKER_FILE)):
            return ItemType.FOLDER
        if await self._fs.exists(join(full_path, PROJECT_JSON_FILE)):
            return ItemType.PROJECT
        return None

    async def _require_folder(self, folder_path: str, root_dir: str) -> None:
        if await self.detect_directory_type(folder_path, root_dir) != ItemType.FOLDER:
            raise FolderNotFoundError(f'Path "{folder_path}" is not a valid folder')

    async def _read_entries(
        self,
        folder_path: Optional[str],
        root_dir: str,
        include_unmarked: bool = False
    ) -> List[FolderItem]:
        """
        Read the direct child directories of a folder in listing order.
        Plain files and hidden entries are skipped; unmarked directories are
        skipped unless include_unmarked is set, in which case they count as folders.
        """
        try:
            entries = await self._fs.list_entries(self._full_path(folder_path, root_dir))
        except (FileNotFoundError, NotADirectoryError) as e:
            raise FolderNotFoundError(f'Folder "{folder_path or "/"}" not found') from e

        items = []
        for entry in entries:
            if not entry.is_directory or entry.name.startswith('.'):
                continue

            item_path = join(folder_path, entry.name)
            item_type = await self.detect_directory_type(item_path, root_dir)
            if item_type is None:
                if not include_unmarked:
                    continue
                item_type = ItemType.FOLDER

            items.append(FolderItem(type=item_type, id=generate_id(), name=entry.name, path=item_path))

        return items

    async def _rename(self, old_path: str, new_path: str, root_dir: str) -> None:
        """Move a whole subtree, translating OS errors into business errors."""
        try:
            await self._fs.rename_subtree(
                self._full_path(old_path, root_dir),
                self._full_path(new_path, root_dir)
            )
        except FileExistsError as e:
            raise CollisionError(f'An item already exists at "{new_path}"') from e
        except FileNotFoundError as e:
            raise NotFoundError(f'Cannot move "{old_path}" to "{new_path}": path not found') from e

    async def list_folder_contents(self, folder_path: Optional[str], root_dir: Optional[str] = None) -> List[FolderItem]:
        """
        List the folders and projects directly inside a folder.
        Always re-read from the filesystem; cached children are never consulted.
        """
        items = await self._read_entries(folder_path or None, self._root(root_dir))
        logger.debug(f"Listed {len(items)} item(s) in '{folder_path or '/'}'")
        return sort_folder_items(items)

    async def create_folder(self, parent_path: Optional[str], name: str, root_dir: Optional[str] = None) -> Folder:
        """
        Create a new folder under parent_path.

        A name collision is resolved by suffixing the new folder's name
        (name-1, name-2, ...); existing entries are never renamed.
        """
        name = validate_folder_name(name)
        root = self._root(root_dir)
        parent_path = parent_path or None

        if parent_path is not None:
            await self._require_folder(parent_path, root)

        unique_name = await generate_unique_name(self._fs, parent_path, name, root)
        folder_path = join(parent_path, unique_name)
        full_path = self._full_path(folder_path, root)

        await self._fs.create_directory(full_path)
        try:
            await self._fs.write_marker_file(full_path)
        except OSError as e:
            raise PartialFailureError(
                f'Directory "{folder_path}" was created but its folder marker could not be written: {e}',
                completed=[folder_path]
            ) from e

        logger.info(f"Created folder '{folder_path}'")
        return Folder(
            id=generate_id(),
            name=unique_name,
            path=folder_path,
            parent_path=parent_path,
            children=[],
            is_expanded=False
        )

    async def rename_folder(self, folder_path: str, new_name: str, root_dir: Optional[str] = None) -> Folder:
        """
        Rename a folder; its whole subtree moves with it.

        Unlike create, a collision is reported rather than resolved.
        """
        new_name = validate_folder_name(new_name)
        root = self._root(root_dir)
        await self._require_folder(folder_path, root)

        parent_path = parent_of(folder_path)
        new_path = join(parent_path, new_name)

        if new_path != folder_path:
            if await self._fs.exists(self._full_path(new_path, root)):
                raise CollisionError(f'A folder or project with name "{new_name}" already exists at this level')
            await self._rename(folder_path, new_path, root)
            logger.info(f"Renamed folder '{folder_path}' -> '{new_path}'")

        children = await self.list_folder_contents(new_path, root)
        return Folder(
            id=generate_id(),
            name=new_name,
            path=new_path,
            parent_path=parent_path,
            children=children,
            is_expanded=False
        )

    async def _move_item(self, source_path: str, target_path: Optional[str], root_dir: str) -> str:
        item_name = name_of(source_path)
        new_path = join(target_path, item_name)

        if target_path is not None:
            await self._require_folder(target_path, root_dir)

        if await self._fs.exists(self._full_path(new_path, root_dir)):
            raise CollisionError(f'An item with name "{item_name}" already exists at the target location')

        await self._rename(source_path, new_path, root_dir)
        return new_path

    async def move_folder(self, folder_path: str, target_path: Optional[str], root_dir: Optional[str] = None) -> str:
        """
        Move a folder (and everything in it) under target_path, or to the root if None.

        Raises:
            CyclicMoveError: target is the folder itself or one of its descendants
        """
        target_path = target_path or None

        if not is_valid_move_target(folder_path, target_path):
            logger.warning(f"Rejected move of '{folder_path}' into '{target_path}'")
            raise CyclicMoveError()

        if target_path == parent_of(folder_path):
            return folder_path

        root = self._root(root_dir)
        await self._require_folder(folder_path, root)

        new_path = await self._move_item(folder_path, target_path, root)
        logger.info(f"Moved folder '{folder_path}' -> '{new_path}'")
        return new_path

    async def move_project(self, project_path: str, target_path: Optional[str], root_dir: Optional[str] = None) -> str:
        """Move a project under target_path, or to the root if None."""
        target_path = target_path or None

        if target_path == parent_of(project_path):
            return project_path

        root = self._root(root_dir)
        if await self.detect_directory_type(project_path, root) != ItemType.PROJECT:
            raise ProjectNotFoundError(f'Path "{project_path}" is not a valid project')

        new_path = await self._move_item(project_path, target_path, root)
        logger.info(f"Moved project '{project_path}' -> '{new_path}'")
        return new_path

    async def delete_folder(self, folder_path: str, root_dir: Optional[str] = None) -> List[FolderItem]:
        """
        Delete a folder without destroying its contents.

        Every direct child is first promoted to the folder's parent, then the
        emptied folder is removed.

        A child carrying the folder's own name is allowed: the folder is first
        moved aside to a hidden name so the child can take its place.

        Returns:
            The promoted children at their new paths, in listing order

        Raises:
            CollisionError: a child's name is already taken in the parent (nothing is changed)
            PartialFailureError: a step failed after some children were promoted
        """
        root = self._root(root_dir)
        await self._require_folder(folder_path, root)

        contents = await self._read_entries(folder_path, root, include_unmarked=True)
        parent_path = parent_of(folder_path)
        folder_name = name_of(folder_path)

        for item in contents:
            # A child named like the folder takes the folder's own place
            if item.name == folder_name:
                continue
            if await self._fs.exists(self._full_path(join(parent_path, item.name), root)):
                raise CollisionError(
                    f'Cannot delete "{folder_path}": "{item.name}" already exists in the parent folder'
                )

        source_path = folder_path
        if any(item.name == folder_name for item in contents):
            hidden_name = await generate_unique_name(self._fs, parent_path, f".{folder_name}-deleting", root)
            source_path = join(parent_path, hidden_name)
            await self._rename(folder_path, source_path, root)
            logger.debug(f"Moved '{folder_path}' aside to '{source_path}' before promoting its contents")

        moved_items: List[FolderItem] = []
        for item in contents:
            new_path = join(parent_path, item.name)
            try:
                await self._rename(join(source_path, item.name), new_path, root)
            except (FolderTreeError, OSError) as e:
                if not moved_items and source_path == folder_path:
                    raise
                logger.error(f"Deleting '{folder_path}' failed after promoting {len(moved_items)} item(s): {e}")
                raise PartialFailureError(
                    f'Deleting "{folder_path}" failed after promoting {len(moved_items)} item(s): {e}',
                    completed=moved_items
                ) from e
            moved_items.append(FolderItem(type=item.type, id=item.id, name=item.name, path=new_path))

        try:
            await self._fs.remove_subtree(self._full_path(source_path, root))
        except OSError as e:
            if not moved_items:
                raise
            logger.error(f"Contents of '{folder_path}' were promoted but the folder could not be removed: {e}")
            raise PartialFailureError(
                f'Contents of "{folder_path}" were promoted but the folder could not be removed: {e}',
                completed=moved_items
            ) from e

        logger.info(f"Deleted folder '{folder_path}', promoted {len(moved_items)} item(s)")
        return moved_items

    async def build_folder(self, folder_path: str, root_dir: Optional[str] = None) -> Folder:
        """Build a Folder record with freshly listed children."""
        children = await self.list_folder_contents(folder_path, root_dir)
        return Folder(
            id=generate_id(),
            name=name_of(folder_path),
            path=folder_path,
            parent_path=parent_of(folder_path),
            children=children,
            is_expanded=False
        )

    async def build_folder_tree(self, root_dir: Optional[str] = None) -> FolderTree:
        """
        Build the complete folder tree from the filesystem.
        Every folder reachable from the root gets an entry in the arena.
        """
        root_items = await self.list_folder_contents(None, root_dir)
        folders = {}

        pending = [item.path for item in root_items if item.is_folder()]
        while pending:
            folder_path = pending.pop()
            folder = await self.build_folder(folder_path, root_dir)
            folders[folder_path] = folder
            pending.extend(child.path for child in folder.children if child.is_folder())

        logger.debug(f"Built folder tree: {len(root_items)} root item(s), {len(folders)} folder(s)")
        return FolderTree(root_items=root_items, folders=folders)

    async def load_folder_in_tree(self, tree: FolderTree, folder_path: str, root_dir: Optional[str] = None) -> FolderTree:
        """
        Reload one folder (and any of its subfolders not yet loaded) into a copy of the tree.
        The folder keeps its id and expansion state if it was already loaded.
        """
        await self._require_folder(folder_path, self._root(root_dir))

        folder = await self.build_folder(folder_path, root_dir)
        previous = tree.folders.get(folder_path)
        if previous is not None:
            folder.id = previous.id
            folder.is_expanded = previous.is_expanded

        folders = dict(tree.folders)
        folders[folder_path] = folder

        for child in folder.children:
            if child.is_folder() and child.path not in folders:
                folders[child.path] = await self.build_folder(child.path, root_dir)

        return FolderTree(root_items=list(tree.root_items), folders=folders)
