"""
Response Status Codes

Status codes carried in the ``code`` field of every API response.
"""


class ResponseCode:
    """Standard response status codes"""

    SUCCESS = 200
    CREATED = 201

    BAD_REQUEST = 400
    NOT_FOUND = 404

    INTERNAL_SERVER_ERROR = 500

    # Business codes
    BUSINESS_ERROR = 1000
    VALIDATION_ERROR = 1001

    _MESSAGES = {
        SUCCESS: "Success",
        CREATED: "Created successfully",
        BAD_REQUEST: "Bad request",
        NOT_FOUND: "Resource not found",
        INTERNAL_SERVER_ERROR: "Internal server error",
        BUSINESS_ERROR: "Business logic error",
        VALIDATION_ERROR: "Validation error",
    }

    @classmethod
    def get_message(cls, code: int) -> str:
        """Get default message for status code"""
        return cls._MESSAGES.get(code, "Unknown error")
