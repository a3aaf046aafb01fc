"""
Unified Response Model

Standard envelope returned by every service method and API endpoint.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field
from .response_code import ResponseCode


class BaseResponse(BaseModel):
    """Base response model for all API endpoints"""

    code: int = Field(ResponseCode.SUCCESS, description="API status code")
    message: str = Field("success", description="API status message")
    data: Optional[Any] = Field(None, description="API data")

    model_config = {
        "arbitrary_types_allowed": True,
        "json_schema_extra": {
            "example": {
                "code": 200,
                "message": "success",
                "data": None
            }
        }
    }

    @property
    def ok(self) -> bool:
        return self.code in (ResponseCode.SUCCESS, ResponseCode.CREATED)

    @classmethod
    def _build(cls, code: int, data: Any = None, message: Optional[str] = None):
        if message is None:
            message = ResponseCode.get_message(code)
        return cls(code=code, message=message, data=data)

    @classmethod
    def success(cls, data: Any = None, message: Optional[str] = None):
        """Create success response"""
        return cls._build(ResponseCode.SUCCESS, data, message)

    @classmethod
    def created(cls, data: Any = None, message: Optional[str] = None):
        """Create response for resource creation"""
        return cls._build(ResponseCode.CREATED, data, message)

    @classmethod
    def error(cls, data: Any = None, message: Optional[str] = None, code: Optional[int] = None):
        """
        Create error response

        Args:
            data: Response data
            message: Custom error message
            code: Error status code, defaults to 500

        Returns:
            BaseResponse with error status
        """
        return cls._build(code or ResponseCode.INTERNAL_SERVER_ERROR, data, message)

    @classmethod
    def not_found(cls, data: Any = None, message: Optional[str] = None):
        """Create response for resource not found"""
        return cls._build(ResponseCode.NOT_FOUND, data, message)

    @classmethod
    def validation_error(cls, data: Any = None, message: Optional[str] = None):
        """Create response for validation error"""
        return cls._build(ResponseCode.VALIDATION_ERROR, data, message)

    @classmethod
    def business_error(cls, data: Any = None, message: Optional[str] = None):
        """Create response for business logic error"""
        return cls._build(ResponseCode.BUSINESS_ERROR, data, message)


class ListResponse(BaseResponse):
    """Response model for list endpoints"""

    @classmethod
    def success(cls, items: List[Any], total: Optional[int] = None, message: Optional[str] = None):
        """
        Create success response for list data

        Args:
            items: List of items
            total: Total count, defaults to ``len(items)``
            message: Custom message
        """
        data = {
            "items": items,
            "total": total if total is not None else len(items),
        }
        return cls._build(ResponseCode.SUCCESS, data, message)
