"""
Global Exception Handlers

Unified handling of all API exceptions to ensure consistent error response format.
"""

import logging
import os

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError, HTTPException
from starlette.exceptions import HTTPException as StarletteHTTPException

from restspace.utils.model.response_model import BaseResponse
from restspace.utils.model.response_code import ResponseCode
from restspace.utils.exceptions.base_exceptions import BusinessException, NotFoundError, ValidationException

logger = logging.getLogger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request parameter validation errors

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        Unified format error response
    """
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    details = []
    for error in exc.errors():
        detail = {
            "loc": list(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        if "input" in error:
            detail["input"] = str(error["input"])
        details.append(detail)

    response = BaseResponse.validation_error(
        data={"details": details},
        message="; ".join(d["msg"] for d in details),
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump()
    )


async def domain_validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """Handle ValidationException raised below the router layer"""
    logger.warning(f"Validation error on {request.url}: {exc.message} {exc.errors}")

    response = BaseResponse.validation_error(data={"details": exc.errors}, message=exc.message)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=response.model_dump()
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle HTTP exceptions

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        Unified format error response
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        response = BaseResponse.not_found(message=exc.detail)
    else:
        response = BaseResponse.error(message=exc.detail, code=exc.status_code)

    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump()
    )


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """
    Handle business logic exceptions

    Args:
        request: Request object
        exc: Business exception

    Returns:
        Unified format error response
    """
    logger.warning(f"Business error on {request.url}: {exc.message}")

    if isinstance(exc, NotFoundError):
        response = BaseResponse.not_found(message=exc.message, data=exc.data)
        status_code = status.HTTP_404_NOT_FOUND
    else:
        response = BaseResponse.business_error(message=exc.message, data=exc.data)
        status_code = status.HTTP_400_BAD_REQUEST

    return JSONResponse(
        status_code=status_code,
        content=response.model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions, including filesystem ``OSError``

    Args:
        request: Request object
        exc: Exception

    Returns:
        Unified format error response
    """
    logger.error(f"Unhandled exception on {request.url}: {exc}", exc_info=True)

    # Detailed error in development, generic error in production
    is_dev = os.getenv("ENVIRONMENT", "development") == "development"

    if is_dev:
        message = f"Internal server error: {str(exc)}"
        data = {
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    else:
        message = "Internal server error, please try again later"
        data = None

    response = BaseResponse.error(
        message=message,
        data=data,
        code=ResponseCode.INTERNAL_SERVER_ERROR
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=response.model_dump()
    )


def register_exception_handlers(app):
    """
    Register all exception handlers

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationException, domain_validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
