"""
Service Module

业务逻辑服务层
"""

from .workspace_service import WorkspaceService, get_workspace_manager
from .rest_service import RestService, get_safe_path

__all__ = [
    "WorkspaceService",
    "RestService",
    "get_workspace_manager",
    "get_safe_path",
]
