"""
Structured Logging Utilities

Adds request-scoped context to log records and logs the start and outcome
of lending operations.
"""

import inspect
import logging
from typing import Any, Dict, Optional
from contextvars import ContextVar
from functools import wraps

from exceptions import ApplicationError, DataAccessError


# Context variable for request-scoped logging context
_logging_context: ContextVar[Dict[str, Any]] = ContextVar('logging_context', default={})

# Arguments copied into the log context when present
CONTEXT_KEYS = ("book_id", "borrower_id", "loan_id")


class StructuredLogger:
    """
    Wrapper around standard logger that adds structured context.

    Usage:
        logger = StructuredLogger(__name__)
        logger.info("Book borrowed", extra={
            "book_id": book.id,
            "borrower_id": borrower.id,
        })
    """

    def __init__(self, name: str):
        """
        Initialize structured logger.

        Args:
            name: Logger name (typically __name__)
        """
        self.logger = logging.getLogger(name)

    def _add_context(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Merge the ContextVar context with per-call extras.
        """
        context = _logging_context.get().copy()
        if extra:
            context.update(extra)
        return context

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.debug(message, extra=self._add_context(extra))

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.info(message, extra=self._add_context(extra))

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.logger.warning(message, extra=self._add_context(extra))

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self.logger.error(message, extra=self._add_context(extra), exc_info=exc_info)


def set_logging_context(**kwargs):
    """
    Set logging context for the current request/operation.

    Example:
        set_logging_context(request_id="abc-123", borrower_id=borrower_id)
    """
    context = _logging_context.get().copy()
    context.update(kwargs)
    _logging_context.set(context)


def get_logging_context() -> Dict[str, Any]:
    return _logging_context.get().copy()


def clear_logging_context():
    """Clear the logging context."""
    _logging_context.set({})


def _log_failure(logger: StructuredLogger, operation_name: str, context: Dict[str, Any], e: BaseException):
    context["error_type"] = type(e).__name__
    if isinstance(e, ApplicationError) and not isinstance(e, DataAccessError):
        # Business-rule outcome, not a fault
        context["error"] = e.message
        logger.warning(f"Rejected {operation_name}: {e.message}", extra=context)
    else:
        context["error"] = str(e)
        logger.error(f"Failed {operation_name}", extra=context, exc_info=True)


def log_operation(operation_name: str):
    """
    Decorator to log operation start, completion and failure with context.

    Business-rule errors are logged at WARNING, anything else at ERROR with
    the traceback. Exceptions are always re-raised.

    Example:
        @log_operation("borrow_book")
        def borrow_book(self, book_id: str, borrower_id: str):
            ...
    """
    def decorator(func):
        signature = inspect.signature(func)

        def _context(args, kwargs) -> Dict[str, Any]:
            context = {"operation": operation_name}
            try:
                bound = signature.bind_partial(*args, **kwargs).arguments
            except TypeError:
                bound = kwargs
            for key in CONTEXT_KEYS:
                if key in bound:
                    context[key] = bound[key]
            return context

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = StructuredLogger(func.__module__)
            context = _context(args, kwargs)
            logger.debug(f"Starting {operation_name}", extra=context)

            try:
                result = func(*args, **kwargs)
                logger.info(f"Completed {operation_name}", extra=context)
                return result
            except Exception as e:
                _log_failure(logger, operation_name, context, e)
                raise

        return wrapper

    return decorator
