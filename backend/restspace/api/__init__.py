"""
API Routers Module

FastAPI路由模块
"""

from .rest_router import rest_router
from .workspace_router import workspace_router

__all__ = [
    "rest_router",
    "workspace_router",
]
