"""
Standardized response utilities and exception handlers
"""

import logging
from typing import Any, Optional
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import CheckinError, StorageError
from app.schemas.common import StandardResponse, ErrorResponse

logger = logging.getLogger(__name__)

def success_response(
    message: str,
    data: Any = None,
    status_code: int = 200,
    **extra: Any
) -> JSONResponse:
    """Create standardized success response"""
    response = StandardResponse(
        success=True,
        message=message,
        data=data
    )
    content = {**response.model_dump(), **extra}
    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code
    )

def error_response(
    message: str,
    error_code: Optional[str] = None,
    details: Any = None,
    status_code: int = 400,
    **extra: Any
) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(
        message=message,
        error_code=error_code,
        details=details
    )
    content = {**response.model_dump(), **extra}
    return JSONResponse(
        content=jsonable_encoder(content),
        status_code=status_code
    )

def rate_limit_error():
    """Create rate limit error"""
    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Please try again later."
    )

async def checkin_error_handler(request: Request, exc: CheckinError) -> JSONResponse:
    """Convert a domain error into the standard error body"""
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    extra = {}
    if getattr(exc, "errors", None) is not None:
        extra["errors"] = exc.errors
    return error_response(
        message=exc.message,
        error_code=exc.code.value,
        details=exc.details,
        status_code=exc.status_code,
        **extra
    )

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        message=str(exc.detail),
        status_code=exc.status_code
    )

async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        message=StorageError.default_message,
        error_code="INTERNAL_ERROR",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CheckinError, checkin_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
