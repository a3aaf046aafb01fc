"""
Core constants

HTTP method tokens recognised as request-file extensions.
"""

from enum import Enum
from typing import Any, Optional


class HttpMethod(str, Enum):
    """HTTP methods a request file may carry as its extension"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    def __str__(self) -> str:
        return self.value


_METHOD_TOKENS = {m.value for m in HttpMethod}

DEFAULT_REQUEST_NAME = "New request"
DEFAULT_METHOD = HttpMethod.GET

# Suffix appended to the target directory name on copy/move collisions
COPY_SUFFIX = " - Copy"


def is_http_method(token: Any) -> bool:
    """Exact, case-sensitive match against the method tokens."""
    return isinstance(token, str) and token in _METHOD_TOKENS


def to_http_method(token: Any) -> Optional[HttpMethod]:
    if isinstance(token, HttpMethod):
        return token
    if is_http_method(token):
        return HttpMethod(token)
    return None
