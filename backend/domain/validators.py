"""
Value Validators

Pure checks for catalog, borrower and loan input. Each check raises the
specific validation error for the first violation it finds and returns the
cleaned value when one applies.
"""

import re
from typing import Optional, Tuple

from constants import FieldLimits, LoanPolicy
from exceptions import BookValidationError, BorrowerValidationError, LoanValidationError
from domain.value_objects.book_category import BookCategory

_MARKUP_CHARS = re.compile(r"[<>'\"&\\/()=]")
_SCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_NON_DIGIT = re.compile(r"\D")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


# Text sanitizing

def sanitize_text(value: Optional[str]) -> str:
    """
    Strip markup-significant characters and script patterns from free text.

    Passes run in a fixed order: markup characters, ``javascript:``,
    ``on*=`` handlers, then whitespace collapsing. Blank input gives "".
    """
    if _is_blank(value):
        return ""
    sanitized = _MARKUP_CHARS.sub("", value)
    sanitized = _SCRIPT_SCHEME.sub("", sanitized)
    sanitized = _EVENT_HANDLER.sub("", sanitized)
    return _WHITESPACE.sub(" ", sanitized).strip()


def split_full_name(full_name: Optional[str]) -> Tuple[str, str]:
    """
    Split a full name into (first, last).

    A single word becomes the first name with an empty last name; with more
    than two words everything after the first word is the last name.
    """
    if _is_blank(full_name):
        raise BorrowerValidationError("Name is required", field="name")

    parts = sanitize_text(full_name).split()
    if not parts:
        raise BorrowerValidationError("Name is required", field="name")
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], " ".join(parts[1:])


# Book fields

def validate_title(title: Optional[str]) -> str:
    if _is_blank(title):
        raise BookValidationError("Book title is required", field="title")
    if len(title) > FieldLimits.TITLE:
        raise BookValidationError(
            f"Book title cannot exceed {FieldLimits.TITLE} characters", field="title"
        )
    return title


def validate_author(author: Optional[str]) -> str:
    if _is_blank(author):
        raise BookValidationError("Book author is required", field="author")
    if len(author) > FieldLimits.AUTHOR:
        raise BookValidationError(
            f"Book author cannot exceed {FieldLimits.AUTHOR} characters", field="author"
        )
    return author


def validate_page_count(page_count: int) -> int:
    if page_count is None or page_count < FieldLimits.MIN_PAGE_COUNT:
        raise BookValidationError("Page count must be a positive number", field="page_count")
    if page_count > FieldLimits.MAX_PAGE_COUNT:
        raise BookValidationError("Page count cannot exceed 10,000 pages", field="page_count")
    return page_count


def validate_category(category: Optional[str]) -> BookCategory:
    if _is_blank(category):
        raise BookValidationError("Book category is required", field="category")
    if len(category) > FieldLimits.CATEGORY:
        raise BookValidationError(
            f"Book category cannot exceed {FieldLimits.CATEGORY} characters", field="category"
        )
    try:
        return BookCategory.from_string(category)
    except ValueError:
        raise BookValidationError(f"Invalid category: {category}", field="category")


def clean_isbn(isbn: str) -> str:
    """Remove hyphens and spaces from an ISBN."""
    return isbn.replace("-", "").replace(" ", "")


def validate_isbn(isbn: Optional[str]) -> str:
    """
    Validate an ISBN-10 or ISBN-13 and return its cleaned form.

    ISBN-10 allows an 'X' check character in the last position. No checksum
    arithmetic is performed.
    """
    if _is_blank(isbn):
        raise BookValidationError("ISBN is required", field="isbn")

    cleaned = clean_isbn(isbn)
    if len(cleaned) not in (10, 13):
        raise BookValidationError("ISBN must be 10 or 13 characters", field="isbn")

    if len(cleaned) == 10:
        body, check = cleaned[:9], cleaned[9]
        if not (body.isdigit() and body.isascii()) or not (check == "X" or check.isdigit()):
            raise BookValidationError(
                "ISBN must contain only digits (or X for ISBN-10)", field="isbn"
            )
    elif not (cleaned.isdigit() and cleaned.isascii()):
        raise BookValidationError("ISBN must contain only digits", field="isbn")

    return cleaned


# Borrower fields

def validate_first_name(first_name: Optional[str]) -> str:
    if _is_blank(first_name):
        raise BorrowerValidationError("First name is required", field="first_name")
    sanitized = sanitize_text(first_name)
    if len(sanitized) > FieldLimits.FIRST_NAME:
        raise BorrowerValidationError(
            f"First name cannot exceed {FieldLimits.FIRST_NAME} characters", field="first_name"
        )
    return sanitized


def validate_last_name(last_name: Optional[str]) -> str:
    sanitized = sanitize_text(last_name)
    if len(sanitized) > FieldLimits.LAST_NAME:
        raise BorrowerValidationError(
            f"Last name cannot exceed {FieldLimits.LAST_NAME} characters", field="last_name"
        )
    return sanitized


def validate_email(email: Optional[str]) -> str:
    """Validate an email address and return it lower-cased and trimmed."""
    if _is_blank(email):
        raise BorrowerValidationError("Email is required", field="email")
    if len(email) > FieldLimits.EMAIL:
        raise BorrowerValidationError(
            f"Email cannot exceed {FieldLimits.EMAIL} characters", field="email"
        )
    if not _EMAIL.match(email):
        raise BorrowerValidationError("Invalid email format", field="email")
    return email.lower().strip()


def normalize_phone(phone: Optional[str]) -> Optional[str]:
    """
    Validate a phone number and reduce it to its digits.

    Blank input means "no phone" and gives None.
    """
    if _is_blank(phone):
        return None
    if len(phone) > FieldLimits.PHONE_RAW:
        raise BorrowerValidationError(
            f"Phone number cannot exceed {FieldLimits.PHONE_RAW} characters", field="phone"
        )
    digits = _NON_DIGIT.sub("", phone)
    if not FieldLimits.PHONE_MIN_DIGITS <= len(digits) <= FieldLimits.PHONE_MAX_DIGITS:
        raise BorrowerValidationError(
            f"Phone number must be between {FieldLimits.PHONE_MIN_DIGITS} and "
            f"{FieldLimits.PHONE_MAX_DIGITS} digits",
            field="phone",
        )
    return digits


# Loan fields

def validate_loan_period(loan_period_days: int) -> int:
    if loan_period_days is None or loan_period_days <= 0:
        raise LoanValidationError("Loan period must be greater than 0 days", field="loan_period_days")
    if loan_period_days > LoanPolicy.MAX_LOAN_DAYS:
        raise LoanValidationError(
            f"Loan period cannot exceed {LoanPolicy.MAX_LOAN_DAYS} days", field="loan_period_days"
        )

    standard = LoanPolicy.STANDARD_LOAN_DAYS
    tolerance = LoanPolicy.LOAN_PERIOD_TOLERANCE_DAYS
    if abs(loan_period_days - standard) > tolerance:
        raise LoanValidationError(
            f"Loan period must be between {standard - tolerance} and {standard + tolerance} days",
            field="loan_period_days",
        )
    return loan_period_days
