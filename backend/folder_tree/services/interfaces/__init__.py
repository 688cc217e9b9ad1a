"""
Service interfaces - contracts the routers depend on.
"""
from .ifolder_service import IFolderService

__all__ = ["IFolderService"]
