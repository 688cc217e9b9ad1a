"""
Shared dependencies for routers.
Provides filesystem, repository and service initialization.
"""
from typing import Optional

from ..services.filesystem import FileSystemFactory, FileSystemInterface
from ..services.folder_service import FolderService
from ..services.search_service import SearchService
from ..services.tree_service import TreeService
from ..repositories import ITreeRepository, TreeRepositoryFactory
from ..core.config import FILESYSTEM_TYPE, PROJECTS_BASE_DIR, PROJECTS_ROOT, TREE_STORE_TYPE
from ..core.logging_config import get_logger

logger = get_logger(__name__)

# Global services (initialized on startup, shared across request handlers)
filesystem = None
tree_repository = None
folder_service = None
search_service = None
tree_service = None


async def initialize_filesystem(fs: Optional[FileSystemInterface] = None):
    """Initialize filesystem adapter based on configuration (or use the one given)."""
    global filesystem
    
    if fs is not None:
        await fs.initialize()
        filesystem = fs
        logger.info(f"Using provided filesystem: {type(fs).__name__}")
        return
    
    logger.info(f"Initializing filesystem: {FILESYSTEM_TYPE}")
    if FILESYSTEM_TYPE.lower() == "local":
        logger.debug(f"  → Base directory: {PROJECTS_BASE_DIR}")
    filesystem = await FileSystemFactory.create_and_initialize(FILESYSTEM_TYPE, base_dir=PROJECTS_BASE_DIR)
    logger.info(f"  ✅ Filesystem initialized ({type(filesystem).__name__})")


async def initialize_services(
    fs: Optional[FileSystemInterface] = None,
    repository: Optional[ITreeRepository] = None,
    root_dir: str = PROJECTS_ROOT
):
    """
    Initialize all services.
    
    Sets up:
    - Filesystem adapter
    - Tree repository (persisted tree document)
    - Folder service, search service and tree service
    """
    global tree_repository, folder_service, search_service, tree_service
    
    if fs is not None or filesystem is None:
        await initialize_filesystem(fs)
    
    logger.info("Initializing services...")
    
    tree_repository = repository if repository is not None else TreeRepositoryFactory.create(TREE_STORE_TYPE)
    logger.info(f"  → Tree store: {type(tree_repository).__name__}")
    
    folder_service = FolderService(filesystem, root_dir=root_dir)
    await folder_service.ensure_root()
    logger.info(f"  ✅ Folder Service initialized (root: '{root_dir}')")
    
    search_service = SearchService(folder_service)
    logger.info("  ✅ Search Service initialized")
    
    tree_service = TreeService(folder_service, tree_repository)
    logger.info("  ✅ Tree Service initialized")


async def shutdown_services():
    """Close the filesystem adapter and forget all services."""
    global filesystem, tree_repository, folder_service, search_service, tree_service
    
    if filesystem is not None:
        await filesystem.close()
    
    filesystem = None
    tree_repository = None
    folder_service = None
    search_service = None
    tree_service = None


def get_folder_service() -> FolderService:
    """Get folder service (dependency injection)."""
    if folder_service is None:
        raise RuntimeError("Folder service not initialized")
    return folder_service


def get_search_service() -> SearchService:
    """Get search service (dependency injection)."""
    if search_service is None:
        raise RuntimeError("Search service not initialized")
    return search_service


def get_tree_service() -> TreeService:
    """Get tree service (dependency injection)."""
    if tree_service is None:
        raise RuntimeError("Tree service not initialized")
    return tree_service
