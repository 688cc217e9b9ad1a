"""
Data Transfer Objects (DTOs) for API layer.
Separates API contracts from domain entities.
"""
from pydantic import BaseModel
from typing import Dict, List, Optional

class FolderItemDTO(BaseModel):
    """Folder item DTO for API responses."""
    type: str
    id: str
    name: str
    path: str
    
    class Config:
        from_attributes = True

class FolderDTO(BaseModel):
    """Folder DTO for API responses."""
    id: str
    name: str
    path: str
    parent_path: Optional[str]
    children: List[FolderItemDTO] = []
    is_expanded: bool = False
    
    class Config:
        from_attributes = True

class FolderTreeDTO(BaseModel):
    """Folder tree DTO for API responses."""
    root_items: List[FolderItemDTO]
    folders: Dict[str, FolderDTO]

class SearchResultDTO(BaseModel):
    """Search result DTO for API responses."""
    project: FolderItemDTO
    folder_path: str
    matched_text: str

class MoveResponseDTO(BaseModel):
    """Response DTO for move operations."""
    message: str
    old_path: str
    new_path: str

class DeleteResponseDTO(BaseModel):
    """Response DTO for folder deletion."""
    message: str
    moved_items: List[FolderItemDTO]

class ErrorResponseDTO(BaseModel):
    """Error response DTO."""
    error: str
    status_code: int
    path: Optional[str] = None
