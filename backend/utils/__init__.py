"""
Cross-cutting helpers: clock, HTTP error mapping, message sanitizing and
structured logging.
"""

from .error_handlers import handle_api_errors, to_http_exception

__all__ = ["handle_api_errors", "to_http_exception"]
