"""
Business Exception Classes - Base Exception Definitions

Filesystem failures are never wrapped in these types: ``OSError`` from the
adapter reaches the caller unmodified.
"""

from typing import Optional, Any


class BusinessException(Exception):
    """
    Business Logic Exception

    Raised when a request is well-formed but cannot be honoured,
    e.g. a path escaping the request tree.
    """

    def __init__(self, message: str, code: int = 400, data: Any = None):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class ValidationException(Exception):
    """
    Data Validation Exception

    Raised for malformed input such as an unknown HTTP method token
    or an unparseable curl command.
    """

    def __init__(self, errors: Any, code: int = 422, message: str = "Validation failed"):
        self.errors = errors
        self.code = code
        self.message = message
        super().__init__(self.message)


class NotFoundError(BusinessException):
    """Requested node does not exist."""

    def __init__(self, message: str = "Resource not found", resource_type: Optional[str] = None, resource_id: Optional[str] = None):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(message=message, code=404)
