"""
Folder Service Interface.

Defines the contract for folder tree operations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from ...domain.entities import Folder, FolderItem


class IFolderService(ABC):
    """
    Interface for folder business logic.
    
    Defines the contract for folder operations including:
    - Creation
    - Renaming
    - Moving folders and projects
    - Deletion with promotion of contents
    - Listing
    """
    
    @abstractmethod
    async def create_folder(self, parent_path: Optional[str], name: str, root_dir: Optional[str] = None) -> Folder:
        """
        Create a new folder, renaming it on collision.
        
        Args:
            parent_path: Parent folder path (None for root)
            name: Requested folder name
            root_dir: Projects root (defaults to the service's root)
            
        Returns:
            Created Folder entity
        """
        pass
    
    @abstractmethod
    async def rename_folder(self, folder_path: str, new_name: str, root_dir: Optional[str] = None) -> Folder:
        """
        Rename a folder in place.
        
        Args:
            folder_path: Current folder path
            new_name: New folder name
            root_dir: Projects root
            
        Returns:
            Folder entity at its new path
        """
        pass
    
    @abstractmethod
    async def move_folder(self, folder_path: str, target_path: Optional[str], root_dir: Optional[str] = None) -> str:
        """
        Move a folder under another folder.
        
        Args:
            folder_path: Current folder path
            target_path: Target folder path (None for root)
            root_dir: Projects root
            
        Returns:
            New folder path
        """
        pass
    
    @abstractmethod
    async def move_project(self, project_path: str, target_path: Optional[str], root_dir: Optional[str] = None) -> str:
        """
        Move a project under another folder.
        
        Args:
            project_path: Current project path
            target_path: Target folder path (None for root)
            root_dir: Projects root
            
        Returns:
            New project path
        """
        pass
    
    @abstractmethod
    async def delete_folder(self, folder_path: str, root_dir: Optional[str] = None) -> List[FolderItem]:
        """
        Delete a folder after promoting its contents to its parent.
        
        Args:
            folder_path: Folder path to delete
            root_dir: Projects root
            
        Returns:
            Promoted items at their new paths
        """
        pass
    
    @abstractmethod
    async def list_folder_contents(self, folder_path: Optional[str], root_dir: Optional[str] = None) -> List[FolderItem]:
        """
        List direct children of a folder, folders first.
        
        Args:
            folder_path: Folder path (None for root)
            root_dir: Projects root
            
        Returns:
            Sorted list of folder items
        """
        pass
