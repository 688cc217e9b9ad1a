"""
Search Router - Handles project search.

Example Usage:
    GET /projects/search?q=invoice
"""
from fastapi import APIRouter, Query
from typing import List

from .dependencies import get_search_service
from ..api.dto import SearchResultDTO
from ..api.mappers import SearchResultMapper

router = APIRouter()


@router.get("/projects/search", response_model=List[SearchResultDTO])
async def search_projects(q: str = Query("", description="Case-insensitive substring of the project name")):
    """
    Search projects by name across all folders.
    Each result carries the containing folder path and the matched text.
    """
    results = await get_search_service().search_projects(q)
    return SearchResultMapper.to_dto_list(results)
