"""
Request schemas

Pydantic models for persisted request records, scanned tree nodes and
request-tree API payloads.
"""

from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from restspace.core.constants import HttpMethod


def check_node_name(v: Optional[str]) -> Optional[str]:
    """Node names are single path segments"""
    if v and ("/" in v or "\\" in v or v in (".", "..")):
        raise ValueError("Name must not contain path separators or be '.' or '..'")
    return v


# ===================
# Persisted record
# ===================

class KeyValue(BaseModel):
    """Header pair; keys are not required to be unique"""
    key: str = Field(..., description="Header name")
    value: str = Field("", description="Header value")


class TextBody(BaseModel):
    """Raw text body"""
    text: str = Field(..., description="Body text")


class JsonBody(BaseModel):
    """JSON body, stored as serialized JSON text"""
    model_config = ConfigDict(populate_by_name=True)

    json_: str = Field(..., alias="json", description="Serialized JSON")


RequestBody = Union[TextBody, JsonBody]


class RequestData(BaseModel):
    """Serialized form of a request file"""
    name: str = Field(..., description="Display name")
    method: HttpMethod = Field(..., description="HTTP method")
    url: str = Field("", description="Request URL")
    headers: List[KeyValue] = Field(default_factory=list, description="Ordered headers")
    body: Optional[RequestBody] = Field(None, description="Request body")
    path: str = Field(..., description="Backing file path")
    response: Optional[Any] = Field(None, description="Last cached response")


# ===================
# Tree nodes
# ===================

class FolderNode(BaseModel):
    """Directory in the request tree"""
    name: str
    path: str
    method: None = None
    children: List["TreeNode"] = Field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return True


class RequestNode(BaseModel):
    """Request file in the request tree"""
    name: str
    path: str
    method: HttpMethod
    children: None = None

    @property
    def is_folder(self) -> bool:
        return False


TreeNode = Union[FolderNode, RequestNode]

FolderNode.model_rebuild()


class TreeViewElement(BaseModel):
    """UI projection of a tree node; ``children`` only on folders"""
    id: str
    name: str
    children: Optional[List["TreeViewElement"]] = None


TreeViewElement.model_rebuild()


# ===================
# API payloads
# ===================

class CreateNodeRequest(BaseModel):
    """Create a request (method set) or a folder (method omitted)"""
    name: str = Field(..., min_length=1, description="Node name")
    method: Optional[HttpMethod] = Field(None, description="HTTP method; omit for a folder")
    base_path: Optional[str] = Field(None, description="Parent directory, relative to the tree root")

    @field_validator("name")
    @classmethod
    def name_is_segment(cls, v: str) -> str:
        return check_node_name(v)


class TransferRequest(BaseModel):
    """Copy or move ``current`` into the ``target`` directory"""
    current: str = Field(..., description="Source node path")
    target: str = Field(..., description="Destination directory path")


class RenameNodeRequest(BaseModel):
    path: str = Field(..., description="Node path")
    new_name: str = Field(..., description="New name without extension")
    is_dir: bool = Field(False, description="Whether the node is a folder")

    @field_validator("new_name")
    @classmethod
    def new_name_is_segment(cls, v: str) -> str:
        return check_node_name(v)


class UpdateRequestRecord(BaseModel):
    """Partial update of a stored request"""
    path: str = Field(..., description="Request file path")
    name: Optional[str] = None
    method: Optional[HttpMethod] = None
    url: Optional[str] = None
    headers: Optional[List[KeyValue]] = None
    body: Optional[RequestBody] = None
    clear_body: bool = Field(False, description="Drop the stored body")


class CurlImportRequest(BaseModel):
    source: str = Field(..., min_length=1, description="curl command line")
    name: str = Field(..., min_length=1, description="Name of the created request")
    method: Optional[HttpMethod] = Field(None, description="Overrides the parsed method")
    path: Optional[str] = Field(None, description="Destination folder, relative to the tree root")

    @field_validator("name")
    @classmethod
    def name_is_segment(cls, v: str) -> str:
        return check_node_name(v)
