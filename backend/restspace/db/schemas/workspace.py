"""
Workspace schemas

Pydantic models for workspace metadata, history and workspace API payloads.
"""

from pydantic import BaseModel, Field


class WorkspaceMetadataData(BaseModel):
    """Content of the workspace metadata file"""
    id: str = Field(..., description="Workspace id")
    name: str = Field(..., description="Workspace display name")


class WorkspaceHistoryItem(BaseModel):
    """Recently opened workspace"""
    name: str = Field(..., description="Workspace display name")
    path: str = Field(..., description="Workspace directory")


class OpenWorkspaceRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Workspace directory")


class RenameWorkspaceRequest(BaseModel):
    name: str = Field(..., min_length=1, description="New workspace name")
