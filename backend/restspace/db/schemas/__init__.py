"""
Schemas

Pydantic models for persisted records and request/response validation.
"""

from .request import (
    KeyValue,
    TextBody,
    JsonBody,
    RequestBody,
    RequestData,
    FolderNode,
    RequestNode,
    TreeNode,
    TreeViewElement,
    CreateNodeRequest,
    TransferRequest,
    RenameNodeRequest,
    UpdateRequestRecord,
    CurlImportRequest,
)
from .workspace import (
    WorkspaceMetadataData,
    WorkspaceHistoryItem,
    OpenWorkspaceRequest,
    RenameWorkspaceRequest,
)

__all__ = [
    # Request
    "KeyValue",
    "TextBody",
    "JsonBody",
    "RequestBody",
    "RequestData",
    "FolderNode",
    "RequestNode",
    "TreeNode",
    "TreeViewElement",
    "CreateNodeRequest",
    "TransferRequest",
    "RenameNodeRequest",
    "UpdateRequestRecord",
    "CurlImportRequest",
    # Workspace
    "WorkspaceMetadataData",
    "WorkspaceHistoryItem",
    "OpenWorkspaceRequest",
    "RenameWorkspaceRequest",
]
