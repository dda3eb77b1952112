"""
Application-wide constants.

This module centralizes the lending policy numbers and the pagination limits
used by the services and the API layer.
"""


class LoanPolicy:
    """Loan period and overdue fee policy"""

    STANDARD_LOAN_DAYS = 14
    # Allowed deviation from the standard period when a loan is created (1-42 days)
    LOAN_PERIOD_TOLERANCE_DAYS = 28
    # Advisory window used by loan_period_within_standard (1-28 days)
    STANDARD_PERIOD_TOLERANCE_DAYS = 14
    MAX_LOAN_DAYS = 365
    MAX_EXTENSION_DAYS = 14
    MAX_TOTAL_LOAN_DAYS = 42
    MAX_ACTIVE_LOANS_PER_BORROWER = 5
    DAILY_OVERDUE_FEE = "0.50"

    @classmethod
    def min_period(cls) -> int:
        """Shortest loan period accepted by Loan.create"""
        return max(1, cls.STANDARD_LOAN_DAYS - cls.LOAN_PERIOD_TOLERANCE_DAYS)

    @classmethod
    def max_period(cls) -> int:
        """Longest loan period accepted by Loan.create"""
        return min(cls.MAX_LOAN_DAYS, cls.STANDARD_LOAN_DAYS + cls.LOAN_PERIOD_TOLERANCE_DAYS)


class FieldLimits:
    """Maximum field lengths shared by validators and ORM columns"""

    TITLE = 200
    AUTHOR = 100
    CATEGORY = 50
    ISBN = 13
    FIRST_NAME = 50
    LAST_NAME = 50
    EMAIL = 255
    PHONE_RAW = 20
    PHONE_MIN_DIGITS = 10
    PHONE_MAX_DIGITS = 15
    MIN_PAGE_COUNT = 1
    MAX_PAGE_COUNT = 10_000


class Pagination:
    """Paging defaults for list and analytics queries"""

    DEFAULT_PAGE = 1
    DEFAULT_PAGE_SIZE = 20
    DEFAULT_LOANS_PAGE_SIZE = 10
    MAX_PAGE_SIZE = 100
    MAX_RECOMMENDATIONS = 50
    DEFAULT_RECOMMENDATIONS = 10


class ErrorMessages:
    """Client-facing messages that must never carry internal detail"""

    GENERIC = "An error occurred while processing your request"
    DATA_ACCESS = "A data access error occurred. Please try again later."
    CONCURRENT_UPDATE = "The record was modified by another request. Please retry."
    MAX_LENGTH = 200


class ServerConfig:
    """Server configuration constants"""

    HOST = "127.0.0.1"
    PORT = 8080

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404
    CONFLICT = 409
    PRECONDITION_FAILED = 412
    UNPROCESSABLE_ENTITY = 422

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
    SERVICE_UNAVAILABLE = 503
