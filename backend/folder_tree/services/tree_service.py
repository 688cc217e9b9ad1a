"""
Tree Service - keeps the persisted folder tree in line with the filesystem.

Each mutating operation runs against the filesystem first, then patches the
persisted tree explicitly with a pure transformation and saves it.
"""
from dataclasses import replace
from typing import List, Optional

from .folder_service import FolderService
from .tree_patcher import find_inconsistencies, insert_folder, promote_children, relocate_item
from ..api.exceptions import PartialFailureError
from ..domain.entities import Folder, FolderItem, FolderTree
from ..domain.value_objects import ItemType
from ..repositories.interfaces import ITreeRepository
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class TreeService:
    """
    Service for the in-memory projection of the folder hierarchy.
    """

    def __init__(self, folder_service: FolderService, repository: ITreeRepository):
        """
        Initialize tree service.

        Args:
            folder_service: FolderService performing the filesystem operations
            repository: Tree repository holding the persisted document
        """
        self.folder_service = folder_service
        self._repo = repository

    async def get_tree(self) -> FolderTree:
        """Return the persisted tree, building it from the filesystem if none exists."""
        tree = await self._repo.load()
        if tree is None:
            return await self.refresh_tree()

        problems = find_inconsistencies(tree)
        if problems:
            logger.warning(f"Persisted folder tree has {len(problems)} inconsistency(ies): {problems[:5]}")
        return tree

    async def refresh_tree(self) -> FolderTree:
        """Rebuild the tree from the filesystem and persist it."""
        tree = await self.folder_service.build_folder_tree()
        await self._repo.save(tree)
        logger.info(f"Folder tree refreshed ({len(tree.folders)} folder(s))")
        return tree

    async def create_folder(self, parent_path: Optional[str], name: str) -> Folder:
        folder = await self.folder_service.create_folder(parent_path, name)
        tree = await self.get_tree()
        await self._repo.save(insert_folder(tree, folder))
        return folder

    async def rename_folder(self, folder_path: str, new_name: str) -> Folder:
        folder = await self.folder_service.rename_folder(folder_path, new_name)
        tree = relocate_item(await self.get_tree(), folder_path, folder.path, ItemType.FOLDER)
        if folder.path not in tree.folders:
            tree.folders[folder.path] = folder
        await self._repo.save(tree)
        return folder

    async def move_folder(self, folder_path: str, target_path: Optional[str]) -> str:
        new_path = await self.folder_service.move_folder(folder_path, target_path)
        if new_path != folder_path:
            tree = relocate_item(await self.get_tree(), folder_path, new_path, ItemType.FOLDER)
            await self._repo.save(tree)
        return new_path

    async def move_project(self, project_path: str, target_path: Optional[str]) -> str:
        new_path = await self.folder_service.move_project(project_path, target_path)
        if new_path != project_path:
            tree = relocate_item(await self.get_tree(), project_path, new_path, ItemType.PROJECT)
            await self._repo.save(tree)
        return new_path

    async def delete_folder(self, folder_path: str) -> List[FolderItem]:
        try:
            moved_items = await self.folder_service.delete_folder(folder_path)
        except PartialFailureError:
            # The patch cannot be derived from a half-finished delete
            await self.refresh_tree()
            raise

        tree = promote_children(await self.get_tree(), folder_path, moved_items)
        await self._repo.save(tree)
        return moved_items

    async def set_expanded(self, folder_path: str, expanded: bool = True) -> Folder:
        """Reload a folder from the filesystem and record its expansion state."""
        tree = await self.folder_service.load_folder_in_tree(await self.get_tree(), folder_path)
        folder = replace(tree.folders[folder_path], is_expanded=expanded)
        tree.folders[folder_path] = folder
        await self._repo.save(tree)
        return folder
