"""
Folders Router - Handles folder tree operations.

Business errors raised by the services are turned into HTTP responses by the
application's exception handler.
"""
from fastapi import APIRouter, Form, Query
from typing import List, Optional
import urllib.parse

from .dependencies import get_folder_service, get_tree_service
from ..api.dto import DeleteResponseDTO, FolderDTO, FolderItemDTO, FolderTreeDTO, MoveResponseDTO
from ..api.mappers import FolderItemMapper, FolderMapper, FolderTreeMapper
from ..utils.path_utils import normalize_folder_path
from ..core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/folders/tree", response_model=FolderTreeDTO)
async def get_folder_tree():
    """Get the current folder tree."""
    tree = await get_tree_service().get_tree()
    return FolderTreeMapper.to_dto(tree)


@router.post("/folders/tree/refresh", response_model=FolderTreeDTO)
async def refresh_folder_tree():
    """Rebuild the folder tree from the filesystem."""
    tree = await get_tree_service().refresh_tree()
    return FolderTreeMapper.to_dto(tree)


@router.get("/folders/contents", response_model=List[FolderItemDTO])
async def list_folder_contents(path: Optional[str] = Query(None, description="Folder path, empty for root")):
    """
    List folders and projects directly inside a folder.
    Folders come first, each group sorted by name.
    """
    items = await get_folder_service().list_folder_contents(normalize_folder_path(path))
    return FolderItemMapper.to_dto_list(items)


@router.post("/folders", response_model=FolderDTO, status_code=201)
async def create_folder(
    folder_name: str = Form(...),
    parent_folder: Optional[str] = Form(None)
):
    """
    Create a new folder. If the name is taken, a numeric suffix is appended
    (name-1, name-2, ...).
    """
    folder = await get_tree_service().create_folder(normalize_folder_path(parent_folder), folder_name)
    return FolderMapper.to_dto(folder)


@router.put("/folders/{folder_path:path}/rename", response_model=FolderDTO)
async def rename_folder(folder_path: str, new_name: str = Form(...)):
    """Rename a folder. Fails with 409 if the new name is taken."""
    folder_path = urllib.parse.unquote(folder_path)
    folder = await get_tree_service().rename_folder(folder_path, new_name)
    return FolderMapper.to_dto(folder)


@router.put("/folders/{folder_path:path}/move", response_model=MoveResponseDTO)
async def move_folder(folder_path: str, target_folder: Optional[str] = Form(None)):
    """
    Move a folder and all its contents under another folder.
    An empty target_folder moves it to the root.
    """
    folder_path = urllib.parse.unquote(folder_path)
    new_path = await get_tree_service().move_folder(folder_path, normalize_folder_path(target_folder))
    return MoveResponseDTO(message="Folder moved successfully", old_path=folder_path, new_path=new_path)


@router.put("/folders/{folder_path:path}/expand", response_model=FolderDTO)
async def expand_folder(folder_path: str, expanded: bool = Query(True)):
    """Load a folder's contents into the tree and record its expansion state."""
    folder_path = urllib.parse.unquote(folder_path)
    folder = await get_tree_service().set_expanded(folder_path, expanded)
    return FolderMapper.to_dto(folder)


@router.delete("/folders/{folder_path:path}", response_model=DeleteResponseDTO)
async def delete_folder(folder_path: str):
    """
    Delete a folder. Its contents are moved to the parent folder first,
    so nothing inside it is lost.
    """
    folder_path = urllib.parse.unquote(folder_path)
    moved_items = await get_tree_service().delete_folder(folder_path)
    return DeleteResponseDTO(
        message="Folder deleted successfully",
        moved_items=FolderItemMapper.to_dto_list(moved_items)
    )


@router.put("/projects/{project_path:path}/move", response_model=MoveResponseDTO)
async def move_project(project_path: str, target_folder: Optional[str] = Form(None)):
    """Move a project under another folder (empty target_folder for root)."""
    project_path = urllib.parse.unquote(project_path)
    new_path = await get_tree_service().move_project(project_path, normalize_folder_path(target_folder))
    return MoveResponseDTO(message="Project moved successfully", old_path=project_path, new_path=new_path)
