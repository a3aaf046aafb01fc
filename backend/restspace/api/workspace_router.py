"""
Workspace API Router

工作空间相关的API路由定义
"""

from fastapi import APIRouter, Body

from restspace.db.schemas import OpenWorkspaceRequest, RenameWorkspaceRequest
from restspace.service.workspace_service import WorkspaceService

workspace_router = APIRouter(prefix="/workspace", tags=["workspace"])

workspace_service = WorkspaceService()


@workspace_router.post("/open", summary="打开工作空间", operation_id="open_workspace")
async def open_workspace(data: OpenWorkspaceRequest = Body(...)):
    return await workspace_service.open_workspace(path=data.path)


@workspace_router.get("/current", summary="当前工作空间", operation_id="get_current_workspace")
async def get_current():
    return await workspace_service.get_current()


@workspace_router.post("/close", summary="关闭工作空间", operation_id="close_workspace")
async def close_workspace():
    return await workspace_service.close_workspace()


@workspace_router.put("/name", summary="重命名工作空间", operation_id="rename_workspace")
async def rename_workspace(data: RenameWorkspaceRequest = Body(...)):
    return await workspace_service.rename_workspace(name=data.name)


@workspace_router.get("/history", summary="最近的工作空间", operation_id="list_workspace_history")
async def list_history():
    return await workspace_service.list_history()


@workspace_router.delete("/history", summary="清空历史", operation_id="clear_workspace_history")
async def clear_history():
    return await workspace_service.clear_history()
