"""
Uniqueness resolver - picks a collision-free name for a new folder.
"""
from itertools import count
from typing import Optional

from .filesystem.base import FileSystemInterface
from ..utils.path_utils import join
from ..core.logging_config import get_logger

logger = get_logger(__name__)


async def generate_unique_name(
    filesystem: FileSystemInterface,
    parent_path: Optional[str],
    base_name: str,
    root_dir: str = ""
) -> str:
    """
    Return `base_name` if nothing exists at `parent_path/base_name`, otherwise the
    first free `base_name-N` for N = 1, 2, ...

    Each probe is a single existence check. The search has no upper bound.
    Not safe against concurrent creators in the same directory.
    """
    parent_full_path = join(root_dir, parent_path) if parent_path else root_dir
    
    if not await filesystem.exists(join(parent_full_path, base_name)):
        return base_name
    
    for suffix in count(1):
        candidate = f"{base_name}-{suffix}"
        if not await filesystem.exists(join(parent_full_path, candidate)):
            logger.debug(f"Name '{base_name}' taken under '{parent_path or '/'}', using '{candidate}'")
            return candidate
