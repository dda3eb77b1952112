"""
Custom exception classes for the application.

Every failure the lending core can report is one of six kinds:
ValidationError, NotFoundError, ConflictError, PreconditionError,
ConcurrencyError and DataAccessError. Specific subclasses carry a stable
``code`` so callers can tell them apart without parsing messages.
"""


class ApplicationError(Exception):
    """Base exception for all application errors"""

    code = "application_error"

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(ApplicationError):
    """Raised when there's a configuration issue"""

    code = "configuration_error"

    def __init__(self, message: str, invalid_keys: list[str] | None = None):
        details = {"invalid_keys": invalid_keys} if invalid_keys else {}
        super().__init__(message, details)


# Validation

class ValidationError(ApplicationError):
    """Raised when input is malformed or out of range"""

    code = "validation_error"

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, details)
        self.field = field


class BookValidationError(ValidationError):
    code = "book_validation_error"


class BorrowerValidationError(ValidationError):
    code = "borrower_validation_error"


class LoanValidationError(ValidationError):
    code = "loan_validation_error"


# Not found

class NotFoundError(ApplicationError):
    """Raised when a referenced book, borrower or loan does not exist"""

    code = "not_found"


class BookNotFoundError(NotFoundError):
    code = "book_not_found"

    def __init__(self, book_id: str):
        super().__init__(f"Book with ID {book_id} not found", {"book_id": book_id})


class BorrowerNotFoundError(NotFoundError):
    code = "borrower_not_found"

    def __init__(self, borrower_id: str):
        super().__init__(f"Borrower with ID {borrower_id} not found", {"borrower_id": borrower_id})


class LoanNotFoundError(NotFoundError):
    code = "loan_not_found"


# Conflict

class ConflictError(ApplicationError):
    """Raised when the request clashes with current state"""

    code = "conflict"


class BookNotAvailableError(ConflictError):
    code = "book_not_available"

    def __init__(self, book_id: str, message: str | None = None):
        msg = message or f"Book with ID {book_id} is not available for borrowing"
        super().__init__(msg, {"book_id": book_id})


class DuplicateIsbnError(ConflictError):
    code = "duplicate_isbn"

    def __init__(self, message: str = "A book with this ISBN already exists"):
        super().__init__(message)


class DuplicateEmailError(ConflictError):
    code = "duplicate_email"

    def __init__(self, message: str = "A borrower with this email already exists"):
        super().__init__(message)


# Precondition

class PreconditionError(ApplicationError):
    """Raised when an operation is attempted in the wrong state"""

    code = "precondition_failed"


class BorrowerNotActiveError(PreconditionError):
    code = "borrower_not_active"

    def __init__(self, borrower_id: str):
        super().__init__(f"Borrower with ID {borrower_id} is not active", {"borrower_id": borrower_id})


class OperationError(PreconditionError):
    """Raised by aggregate guards when a state transition is not allowed"""

    code = "invalid_operation"


class BookOperationError(OperationError):
    code = "invalid_book_operation"


class LoanOperationError(OperationError):
    code = "invalid_loan_operation"


# Infrastructure

class ConcurrencyError(ApplicationError):
    """Raised when the store detected a concurrent conflicting write"""

    code = "concurrency_conflict"


class DataAccessError(ApplicationError):
    """
    Raised when the store fails for reasons unrelated to business rules.

    The message is always generic; the underlying exception is kept on
    ``cause`` for logging and is never shown to callers.
    """

    code = "data_access_error"

    def __init__(self, operation: str, cause: BaseException | None = None,
                 message: str = "A data access error occurred. Please try again later."):
        super().__init__(message, {"operation": operation})
        self.operation = operation
        self.cause = cause
