"""
Rest API Router

请求树相关的API路由定义
只负责路由定义，所有业务逻辑在service层
"""

from fastapi import APIRouter, Body, Query

from restspace.db.schemas import (
    CreateNodeRequest,
    CurlImportRequest,
    RenameNodeRequest,
    TransferRequest,
    UpdateRequestRecord,
)
from restspace.service.rest_service import RestService

rest_router = APIRouter(prefix="/rest", tags=["rest"])

rest_service = RestService()


@rest_router.get("/requests", summary="扫描请求树", operation_id="list_requests")
async def get_requests():
    """Full scan: folders carry ``children``, requests carry ``method``"""
    return await rest_service.get_requests()


@rest_router.get("/tree", summary="树形视图", operation_id="get_request_tree")
async def get_tree():
    return await rest_service.get_tree()


@rest_router.get("/request", summary="读取请求", operation_id="open_request")
async def open_request(
    path: str = Query(..., description="Request file path"),
):
    """Corrupted request files are rebuilt as empty records"""
    return await rest_service.open_request(path=path)


@rest_router.post("/node", summary="创建请求或文件夹", operation_id="create_node")
async def create_node(data: CreateNodeRequest = Body(...)):
    return await rest_service.create_node(data)


@rest_router.put("/request", summary="保存请求", operation_id="update_request")
async def update_request(data: UpdateRequestRecord = Body(...)):
    return await rest_service.update_request(data)


@rest_router.post("/copy", summary="复制", operation_id="copy_node")
async def copy_node(data: TransferRequest = Body(...)):
    return await rest_service.copy_node(data)


@rest_router.post("/move", summary="移动", operation_id="move_node")
async def move_node(data: TransferRequest = Body(...)):
    return await rest_service.move_node(data)


@rest_router.post("/rename", summary="重命名", operation_id="rename_node")
async def rename_node(data: RenameNodeRequest = Body(...)):
    return await rest_service.rename_node(data)


@rest_router.delete("/node", summary="删除", operation_id="delete_node")
async def delete_node(
    path: str = Query(..., description="Request or folder path"),
):
    return await rest_service.delete_node(path=path)


@rest_router.post("/import/curl", summary="导入 curl 命令", operation_id="import_curl")
async def import_curl(data: CurlImportRequest = Body(...)):
    return await rest_service.import_curl(data)
