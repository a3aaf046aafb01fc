"""
Rest service implementation

请求树相关的业务逻辑层. Resolves API paths inside the current workspace's
request tree and maps results onto ``BaseResponse``.
"""

import logging
from pathlib import Path
from typing import Optional

from restspace.config.logging_config import log_print
from restspace.core.rest_imports import ImportSource
from restspace.core.rest_manager import RestManager
from restspace.core.workspace import WorkspaceManager
from restspace.db.schemas import (
    CreateNodeRequest,
    CurlImportRequest,
    RenameNodeRequest,
    TransferRequest,
    UpdateRequestRecord,
)
from restspace.service.workspace_service import get_workspace_manager
from restspace.utils.exceptions import BusinessException, ValidationException
from restspace.utils.model.response_model import BaseResponse, ListResponse

logger = logging.getLogger(__name__)


def get_safe_path(root: str, relative_path: Optional[str]) -> Optional[str]:
    """
    Resolve ``relative_path`` inside ``root``.

    Absolute paths are accepted when they point inside the root, so paths
    returned by the tree can be sent back as-is. Returns None for paths
    escaping the root.
    """
    base = Path(root).resolve()
    target = (base / (relative_path or "")).resolve()

    try:
        target.relative_to(base)
    except ValueError:
        return None
    return str(target)


class RestService:
    """
    请求树服务类

    Every method works on the request tree of the currently open workspace.
    """

    def __init__(self, manager: WorkspaceManager = None):
        self._manager = manager

    @property
    def manager(self) -> WorkspaceManager:
        return self._manager or get_workspace_manager()

    def _rest(self) -> RestManager:
        workspace = self.manager.workspace
        if workspace is None:
            raise BusinessException(message="No workspace is open")
        return workspace.rest

    def _resolve(self, rest: RestManager, path: Optional[str]) -> str:
        resolved = get_safe_path(rest.get_path(), path)
        if resolved is None:
            raise BusinessException(message=f"Path '{path}' is outside the request tree")
        return resolved

    @staticmethod
    def _failure(action: str, e: Exception) -> BaseResponse:
        if isinstance(e, ValidationException):
            return BaseResponse.validation_error(data={"details": e.errors}, message=e.message)
        if isinstance(e, BusinessException):
            return BaseResponse.business_error(message=e.message)
        logger.error(f"{action} failed: {e}", exc_info=True)
        return BaseResponse.error(message=f"{action} failed: {str(e)}")

    # ------------------------------------------------------------------
    # reads
    # ------------------------------------------------------------------

    @log_print
    async def get_requests(self):
        """完整扫描请求树"""
        try:
            nodes = await self._rest().get_requests()
            return ListResponse.success(items=[n.model_dump(mode="json") for n in nodes])
        except (BusinessException, OSError) as e:
            return self._failure("Scanning requests", e)

    @log_print
    async def get_tree(self):
        """树形视图"""
        try:
            elements = await self._rest().get_as_tree()
            return ListResponse.success(items=[e.model_dump(mode="json", exclude_none=True) for e in elements])
        except (BusinessException, OSError) as e:
            return self._failure("Building tree", e)

    @log_print
    async def open_request(self, path: str):
        """读取请求"""
        try:
            rest = self._rest()
            entity = await rest.open(self._resolve(rest, path))
            if entity is None:
                return BaseResponse.not_found(message=f"Request '{path}' does not exist")
            return BaseResponse.success(data=entity.to_dict())
        except (BusinessException, OSError) as e:
            return self._failure("Opening request", e)

    # ------------------------------------------------------------------
    # mutations
    # ------------------------------------------------------------------

    @log_print
    async def create_node(self, data: CreateNodeRequest):
        """创建请求或文件夹"""
        try:
            rest = self._rest()
            base_path = self._resolve(rest, data.base_path)
            entity = await rest.create(data.name, data.method, base_path)
            if entity is None:
                return BaseResponse.created(
                    data={"path": rest.fs.join(base_path, data.name)},
                    message="Folder created",
                )
            return BaseResponse.created(data=entity.to_dict(), message="Request created")
        except (BusinessException, OSError) as e:
            return self._failure("Creating node", e)

    @log_print
    async def update_request(self, data: UpdateRequestRecord):
        """更新请求内容并保存"""
        try:
            rest = self._rest()
            entity = await rest.open(self._resolve(rest, data.path))
            if entity is None:
                return BaseResponse.not_found(message=f"Request '{data.path}' does not exist")

            if data.name is not None:
                entity.set_name(data.name)
            if data.method is not None:
                entity.set_method(data.method)
            if data.url is not None:
                entity.set_url(data.url)
            if data.headers is not None:
                entity.set_headers(data.headers)
            if data.clear_body:
                entity.set_body(None)
            elif data.body is not None:
                entity.set_body(data.body)

            if entity.dirty:
                await entity.save()
            return BaseResponse.success(data=entity.to_dict(), message="Request saved")
        except (BusinessException, OSError) as e:
            return self._failure("Saving request", e)

    @log_print
    async def copy_node(self, data: TransferRequest):
        """复制到目标文件夹"""
        try:
            rest = self._rest()
            await rest.copy(self._resolve(rest, data.current), self._resolve(rest, data.target))
            return BaseResponse.success(message="Copied")
        except (BusinessException, OSError) as e:
            return self._failure("Copying node", e)

    @log_print
    async def move_node(self, data: TransferRequest):
        """移动到目标文件夹"""
        try:
            rest = self._rest()
            await rest.move(self._resolve(rest, data.current), self._resolve(rest, data.target))
            return BaseResponse.success(message="Moved")
        except (BusinessException, OSError) as e:
            return self._failure("Moving node", e)

    @log_print
    async def rename_node(self, data: RenameNodeRequest):
        """重命名"""
        try:
            rest = self._rest()
            await rest.rename(self._resolve(rest, data.path), data.new_name, data.is_dir)
            return BaseResponse.success(message="Renamed")
        except (BusinessException, OSError) as e:
            return self._failure("Renaming node", e)

    @log_print
    async def delete_node(self, path: str):
        """删除请求或文件夹"""
        try:
            rest = self._rest()
            target = self._resolve(rest, path)
            if target == str(Path(rest.get_path()).resolve()):
                raise BusinessException(message="Refusing to delete the request tree root")
            await rest.delete(target)
            return BaseResponse.success(message="Deleted")
        except (BusinessException, OSError) as e:
            return self._failure("Deleting node", e)

    @log_print
    async def import_curl(self, data: CurlImportRequest):
        """从 curl 命令导入"""
        try:
            workspace = self.manager.workspace
            if workspace is None:
                raise BusinessException(message="No workspace is open")
            source = ImportSource(
                source=data.source,
                name=data.name,
                method=data.method,
                path=self._resolve(workspace.rest, data.path),
            )
            entity = await workspace.imports.curl(source)
            return BaseResponse.created(data=entity.to_dict(), message="Request imported")
        except (BusinessException, ValidationException, OSError) as e:
            return self._failure("Importing curl command", e)
