"""
Error handling decorators and utilities for API endpoints.

Maps the application error kinds onto HTTP status codes in one place so
routers stay thin.
"""

from functools import wraps
from typing import Callable
from fastapi import HTTPException
import inspect
import logging

from constants import ErrorMessages, HTTPStatus
from exceptions import (
    ApplicationError,
    ConcurrencyError,
    ConflictError,
    DataAccessError,
    NotFoundError,
    PreconditionError,
    ValidationError,
)
from utils.message_sanitizer import sanitize_message

logger = logging.getLogger(__name__)


def to_http_exception(operation_name: str, exc: Exception) -> HTTPException:
    """
    Convert an exception raised by a service into an HTTPException.

    Business errors keep their (sanitized) message; data access and
    unexpected errors only ever expose a generic message.
    """
    if isinstance(exc, ValidationError):
        logger.warning(f"{operation_name} - Validation error: {exc.message}")
        return HTTPException(status_code=HTTPStatus.BAD_REQUEST, detail=sanitize_message(exc.message))
    if isinstance(exc, NotFoundError):
        logger.info(f"{operation_name} - Not found: {exc.message}")
        return HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=sanitize_message(exc.message))
    if isinstance(exc, ConflictError):
        logger.warning(f"{operation_name} - Conflict: {exc.message}")
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=sanitize_message(exc.message))
    if isinstance(exc, PreconditionError):
        logger.warning(f"{operation_name} - Precondition failed: {exc.message}")
        return HTTPException(status_code=HTTPStatus.PRECONDITION_FAILED, detail=sanitize_message(exc.message))
    if isinstance(exc, ConcurrencyError):
        logger.warning(f"{operation_name} - Concurrent update: {exc.message}")
        return HTTPException(status_code=HTTPStatus.CONFLICT, detail=ErrorMessages.CONCURRENT_UPDATE)
    if isinstance(exc, DataAccessError):
        logger.error(f"{operation_name} - Data access error: {exc.cause!r}", exc_info=exc)
        return HTTPException(status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail=ErrorMessages.DATA_ACCESS)
    if isinstance(exc, ApplicationError):
        logger.error(f"{operation_name} - Application error: {exc.message}", exc_info=exc)
        return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=ErrorMessages.GENERIC)

    logger.error(f"{operation_name} - Unexpected error: {exc}", exc_info=exc)
    return HTTPException(status_code=HTTPStatus.INTERNAL_SERVER_ERROR, detail=ErrorMessages.GENERIC)


def handle_api_errors(operation_name: str):
    """
    Decorator to handle application errors consistently across endpoints.

    Args:
        operation_name: Human-readable name of the operation (e.g., "Borrow book")

    Returns:
        Decorated function that handles errors uniformly

    Example:
        @router.post("/borrow")
        @handle_api_errors("Borrow book")
        def borrow_book(...):
            return service.borrow_book(...)
    """
    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                # Re-raise HTTPException as-is to preserve status code and detail
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(operation_name, e) from e

        if inspect.iscoroutinefunction(func):
            return async_wrapper
        return sync_wrapper

    return decorator
