"""
Workspace service implementation

Opening workspaces, renaming them and the recent-workspaces list.
"""

import logging
from functools import lru_cache
from pathlib import Path

from restspace.config import get_settings
from restspace.config.logging_config import log_print
from restspace.core.workspace import WorkspaceManager, WorkspaceStore
from restspace.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


@lru_cache
def get_workspace_manager() -> WorkspaceManager:
    """Process-wide manager holding the current workspace."""
    settings = get_settings()
    return WorkspaceManager(WorkspaceStore(str(settings.store_file)))


def _workspace_summary(workspace) -> dict:
    return {
        "id": workspace.metadata.id,
        "name": workspace.metadata.name,
        "path": workspace.path,
        "rest_root": workspace.rest.get_path(),
    }


class WorkspaceService:
    """
    工作空间服务类

    Opens workspace directories and keeps the recent list up to date.
    """

    def __init__(self, manager: WorkspaceManager = None):
        self._manager = manager

    @property
    def manager(self) -> WorkspaceManager:
        return self._manager or get_workspace_manager()

    @log_print
    async def open_workspace(self, path: str):
        """打开工作空间; relative paths resolve against the configured base path"""
        try:
            target = Path(path)
            if not target.is_absolute():
                target = get_settings().workspace_base_path / target
            workspace = await self.manager.open_workspace(str(target.resolve()))
            return BaseResponse.success(data=_workspace_summary(workspace), message="Workspace opened")
        except OSError as e:
            logger.error(f"Failed to open workspace {path}: {e}", exc_info=True)
            return BaseResponse.error(message=f"Failed to open workspace: {str(e)}")

    @log_print
    async def get_current(self):
        """获取当前工作空间"""
        workspace = self.manager.workspace
        if workspace is None:
            return BaseResponse.not_found(message="No workspace is open")
        return BaseResponse.success(data=_workspace_summary(workspace))

    @log_print
    async def close_workspace(self):
        self.manager.close_workspace()
        return BaseResponse.success(message="Workspace closed")

    @log_print
    async def rename_workspace(self, name: str):
        """重命名工作空间 (metadata is persisted by its change callback)"""
        workspace = self.manager.workspace
        if workspace is None:
            return BaseResponse.not_found(message="No workspace is open")
        try:
            await workspace.metadata.set_name(name)
            await workspace.save_history()
            return BaseResponse.success(data=_workspace_summary(workspace), message="Workspace renamed")
        except OSError as e:
            logger.error(f"Failed to rename workspace: {e}", exc_info=True)
            return BaseResponse.error(message=f"Failed to rename workspace: {str(e)}")

    @log_print
    async def list_history(self):
        """最近打开的工作空间"""
        try:
            items = [item.model_dump() for item in await self.manager.get_history()]
            return ListResponse.success(items=items)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read workspace history: {e}", exc_info=True)
            return BaseResponse.error(message=f"Failed to read workspace history: {str(e)}")

    @log_print
    async def clear_history(self):
        try:
            await self.manager.clear_history()
            return BaseResponse.success(message="History cleared")
        except OSError as e:
            logger.error(f"Failed to clear workspace history: {e}", exc_info=True)
            return BaseResponse.error(message=f"Failed to clear workspace history: {str(e)}")
