"""
Error message sanitization for API responses.

Business errors keep their message after scrubbing anything that looks like
internal detail; every other failure is reduced to a generic message.
"""

import re
from typing import Optional

from constants import ErrorMessages
from exceptions import ConflictError, NotFoundError, PreconditionError, ValidationError

_STACK_FRAME = re.compile(r"at\s+[\w\d\.]+\([^)]*\)\s+in\s+[^:]+:\d+", re.IGNORECASE)
_FILE_PATH = re.compile(r"[a-zA-Z]:\\[^:]*|/[^:]*", re.IGNORECASE)
_STORE_DETAIL = re.compile(r"SQL\s+Server|Connection\s+String|Database\s+Error", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

BUSINESS_ERRORS = (ValidationError, NotFoundError, ConflictError, PreconditionError)


def is_business_error(exc: Optional[BaseException]) -> bool:
    """Errors whose message is meant for the caller."""
    return isinstance(exc, BUSINESS_ERRORS)


def sanitize_message(message: Optional[str]) -> str:
    """
    Scrub a message before it leaves the process.

    Truncates to 200 characters, then removes stack frames, file paths and
    store/connection mentions. Falls back to the generic message when
    nothing is left.
    """
    if not message or not message.strip():
        return ErrorMessages.GENERIC

    if len(message) > ErrorMessages.MAX_LENGTH:
        message = message[:ErrorMessages.MAX_LENGTH] + "..."

    sanitized = _STACK_FRAME.sub("", message)
    sanitized = _FILE_PATH.sub("path", sanitized)
    sanitized = _STORE_DETAIL.sub("", sanitized)
    sanitized = _WHITESPACE.sub(" ", sanitized).strip()

    return sanitized or ErrorMessages.GENERIC


def sanitize_error_message(exc: Optional[BaseException]) -> str:
    """Client-safe message for ``exc``; generic unless it is a business error."""
    if exc is None or not is_business_error(exc):
        return ErrorMessages.GENERIC
    return sanitize_message(getattr(exc, "message", None) or str(exc))
