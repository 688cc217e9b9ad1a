"""
Mappers between domain entities and DTOs.
Separates domain layer from API layer.
"""
from typing import List
from ..domain.entities import Folder, FolderItem, FolderTree, SearchResult
from .dto import FolderDTO, FolderItemDTO, FolderTreeDTO, SearchResultDTO

class FolderItemMapper:
    """Maps between FolderItem entity and FolderItemDTO."""
    
    @staticmethod
    def to_dto(item: FolderItem) -> FolderItemDTO:
        """Convert domain entity to DTO."""
        return FolderItemDTO(
            type=item.type.value,
            id=item.id,
            name=item.name,
            path=str(item.path)
        )
    
    @staticmethod
    def to_dto_list(items: List[FolderItem]) -> List[FolderItemDTO]:
        """Convert list of entities to DTOs."""
        return [FolderItemMapper.to_dto(item) for item in items]

class FolderMapper:
    """Maps between Folder entity and FolderDTO."""
    
    @staticmethod
    def to_dto(folder: Folder) -> FolderDTO:
        """Convert domain entity to DTO."""
        return FolderDTO(
            id=folder.id,
            name=folder.name,
            path=str(folder.path),
            parent_path=str(folder.parent_path) if folder.parent_path else None,
            children=FolderItemMapper.to_dto_list(folder.children),
            is_expanded=folder.is_expanded
        )

class FolderTreeMapper:
    """Maps between FolderTree entity and FolderTreeDTO."""
    
    @staticmethod
    def to_dto(tree: FolderTree) -> FolderTreeDTO:
        return FolderTreeDTO(
            root_items=FolderItemMapper.to_dto_list(tree.root_items),
            folders={path: FolderMapper.to_dto(folder) for path, folder in tree.folders.items()}
        )

class SearchResultMapper:
    """Maps between SearchResult entity and SearchResultDTO."""
    
    @staticmethod
    def to_dto_list(results: List[SearchResult]) -> List[SearchResultDTO]:
        return [
            SearchResultDTO(
                project=FolderItemMapper.to_dto(result.project),
                folder_path=result.folder_path,
                matched_text=result.matched_text
            )
            for result in results
        ]
