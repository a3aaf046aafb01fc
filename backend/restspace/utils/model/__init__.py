"""
Response Models

Standard response models for API endpoints.
"""

from .response_code import ResponseCode
from .response_model import BaseResponse, ListResponse

__all__ = [
    "ResponseCode",
    "BaseResponse",
    "ListResponse",
]
