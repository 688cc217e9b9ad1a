"""
Search Service - finds projects by name across the whole folder hierarchy.
"""
import re
from typing import List, Optional, Tuple

from .folder_service import FolderService
from ..domain.entities import FolderItem, SearchResult
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class SearchService:
    """
    Service for project search.
    Walks the persisted hierarchy on the filesystem, never the cached tree.
    """

    def __init__(self, folder_service: FolderService):
        """
        Initialize search service.

        Args:
            folder_service: FolderService used to list folder contents
        """
        self.folder_service = folder_service

    async def search_projects(self, query: str, root_dir: Optional[str] = None) -> List[SearchResult]:
        """
        Find every project whose name contains `query`, ignoring case.

        Args:
            query: Substring to look for; blank queries match nothing
            root_dir: Projects root (defaults to the folder service's root)

        Returns:
            One SearchResult per matching project, annotated with the path of the
            folder containing it ("" at the root) and the matched part of its name
            in the project's own casing
        """
        pattern = query.strip()
        if not pattern:
            return []
        matcher = re.compile(re.escape(pattern), re.IGNORECASE)

        results: List[SearchResult] = []

        # Explicit stack of (containing folder, item) so hierarchy depth is not
        # limited by the recursion limit; a folder's subtree is searched when the
        # folder is reached in listing order
        root_contents = await self.folder_service.list_folder_contents(None, root_dir)
        pending: List[Tuple[Optional[str], FolderItem]] = [(None, item) for item in reversed(root_contents)]
        while pending:
            folder_path, item = pending.pop()

            if item.is_folder():
                contents = await self.folder_service.list_folder_contents(item.path, root_dir)
                pending.extend((item.path, child) for child in reversed(contents))
                continue

            match = matcher.search(item.name)
            if match is None:
                continue

            results.append(SearchResult(
                project=item,
                folder_path=folder_path or "",
                matched_text=match.group(0)
            ))

        logger.debug(f"Search '{query}' matched {len(results)} project(s)")
        return results
