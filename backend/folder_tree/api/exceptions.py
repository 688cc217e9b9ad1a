"""
Custom exceptions for the folder tree.
Separates business exceptions from HTTP exceptions.
"""
from typing import List, Optional

from fastapi import HTTPException, status


class FolderTreeError(Exception):
    """Base class for folder tree business errors."""
    pass

class NotFoundError(FolderTreeError):
    """Raised when an operation targets a path absent from the filesystem."""
    pass

class FolderNotFoundError(NotFoundError):
    """Raised when folder is not found."""
    pass

class ProjectNotFoundError(NotFoundError):
    """Raised when project is not found."""
    pass

class CollisionError(FolderTreeError):
    """Raised when a rename or move target is already occupied."""
    pass

class CyclicMoveError(FolderTreeError):
    """Raised when a folder would be moved into itself or a descendant."""
    
    def __init__(self, message: str = "Cannot move a folder into itself or one of its subfolders"):
        super().__init__(message)

class InvalidFolderNameError(FolderTreeError):
    """Raised when folder name is invalid."""
    pass

class PartialFailureError(FolderTreeError):
    """
    Raised when a multi-step operation fails after some filesystem changes
    were already committed. Nothing is rolled back.
    """
    
    def __init__(self, message: str, completed: Optional[List] = None):
        super().__init__(message)
        self.completed = list(completed or [])

def handle_business_exception(e: Exception) -> HTTPException:
    """
    Convert business exceptions to HTTP exceptions.
    This keeps business logic clean of HTTP concerns.
    """
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, CollisionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, (CyclicMoveError, InvalidFolderNameError)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    elif isinstance(e, PartialFailureError):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    else:
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
