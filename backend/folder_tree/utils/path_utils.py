"""
Path & naming utilities - Pure functions over `/`-joined hierarchical paths.
No filesystem access happens here.
"""
from typing import Optional

from ..domain.value_objects import PATH_SEPARATOR


def join(parent: Optional[str], name: str) -> str:
    """Join a parent path and a name; a None (or empty) parent means the root."""
    if not parent:
        return name
    return f"{parent}{PATH_SEPARATOR}{name}"


def parent_of(path: str) -> Optional[str]:
    """Return everything before the last separator, or None for root-level paths."""
    if PATH_SEPARATOR not in path:
        return None
    return path.rsplit(PATH_SEPARATOR, 1)[0]


def name_of(path: str) -> str:
    """Return the last segment of a path."""
    return path.rsplit(PATH_SEPARATOR, 1)[-1]


def is_ancestor_or_self(candidate_ancestor: str, path: str) -> bool:
    """True iff `path` is `candidate_ancestor` or lies somewhere beneath it."""
    return path == candidate_ancestor or path.startswith(candidate_ancestor + PATH_SEPARATOR)


def replace_prefix(path: str, old_prefix: str, new_prefix: str) -> str:
    """
    Re-root `path` from `old_prefix` onto `new_prefix`.

    Paths outside `old_prefix` are returned unchanged.
    """
    if not is_ancestor_or_self(old_prefix, path):
        return path
    return new_prefix + path[len(old_prefix):]


def normalize_folder_path(folder: Optional[str]) -> Optional[str]:
    """
    Normalize a folder path received from a client (trim whitespace and
    surrounding separators, use None for the root).
    """
    if folder and folder.strip().strip(PATH_SEPARATOR):
        return folder.strip().strip(PATH_SEPARATOR)
    return None
