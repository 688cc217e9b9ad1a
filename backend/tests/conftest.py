import os

# Keep tests off the disk and out of the log directory
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("FILESYSTEM_TYPE", "memory")
os.environ.setdefault("TREE_STORE_TYPE", "memory")

import pytest
import pytest_asyncio

from folder_tree.domain.value_objects import FOLDER_MARKER_FILE, PROJECT_JSON_FILE
from folder_tree.repositories import MemoryTreeRepository
from folder_tree.services.filesystem import MemoryFileSystem
from folder_tree.services.folder_service import FolderService
from folder_tree.services.search_service import SearchService
from folder_tree.services.tree_service import TreeService
from folder_tree.utils.path_utils import join

ROOT = "buza-projects"


@pytest.fixture
def filesystem():
    return MemoryFileSystem()


@pytest_asyncio.fixture
async def folder_service(filesystem):
    service = FolderService(filesystem, root_dir=ROOT)
    await service.ensure_root()
    return service


@pytest.fixture
def search_service(folder_service):
    return SearchService(folder_service)


@pytest.fixture
def tree_repository():
    return MemoryTreeRepository()


@pytest.fixture
def tree_service(folder_service, tree_repository):
    return TreeService(folder_service, tree_repository)


@pytest.fixture
def make_folder(filesystem):
    """Create a marked folder directly on the filesystem (path relative to ROOT)."""
    async def _make(path):
        await filesystem.create_directory(join(ROOT, path), parents=True)
        await filesystem.write_marker_file(join(ROOT, path), FOLDER_MARKER_FILE)
        return path
    return _make


@pytest.fixture
def make_project(filesystem):
    """Create a project directory (with project.json) directly on the filesystem."""
    async def _make(path):
        await filesystem.create_directory(join(ROOT, path), parents=True)
        await filesystem.write_marker_file(join(ROOT, path), PROJECT_JSON_FILE)
        return path
    return _make


@pytest.fixture
def tree_paths(filesystem):
    """Every path under ROOT, relative to ROOT."""
    def _paths():
        prefix = ROOT + "/"
        return sorted(path[len(prefix):] for path in filesystem.all_paths() if path.startswith(prefix))
    return _paths
