"""
Paging helpers shared by the list and analytics services.
"""

import math
from datetime import datetime
from typing import Tuple

from constants import Pagination
from exceptions import ValidationError
from utils import clock


def normalize_paging(page: int, page_size: int) -> Tuple[int, int]:
    """
    Clamp paging for browse-style lists instead of rejecting it.

    page <= 0 becomes 1; page_size <= 0 becomes the default and anything
    above the maximum is capped.
    """
    if page is None or page <= 0:
        page = Pagination.DEFAULT_PAGE
    if page_size is None or page_size <= 0:
        page_size = Pagination.DEFAULT_PAGE_SIZE
    elif page_size > Pagination.MAX_PAGE_SIZE:
        page_size = Pagination.MAX_PAGE_SIZE
    return page, page_size


def validate_paging(page: int, page_size: int) -> None:
    """
    Raises:
        ValidationError: If page is not positive or page_size is outside 1-100
    """
    if page is None or page <= 0:
        raise ValidationError("Page number must be greater than 0", field="page")
    if page_size is None or page_size <= 0 or page_size > Pagination.MAX_PAGE_SIZE:
        raise ValidationError(
            f"Page size must be between 1 and {Pagination.MAX_PAGE_SIZE}", field="page_size"
        )


def validate_date_range(start: datetime, end: datetime) -> Tuple[datetime, datetime]:
    """
    Return the range as naive UTC.

    Raises:
        ValidationError: If start is after end or either lies in the future
    """
    start, end = clock.as_naive_utc(start), clock.as_naive_utc(end)
    if start > end:
        raise ValidationError("Start date cannot be greater than end date", field="start_date")
    now = clock.utcnow()
    if start > now:
        raise ValidationError("Start date cannot be in the future", field="start_date")
    if end > now:
        raise ValidationError("End date cannot be in the future", field="end_date")
    return start, end


def total_pages(total_count: int, page_size: int) -> int:
    return math.ceil(total_count / page_size) if page_size else 0


def has_next_page(page: int, page_size: int, total_count: int) -> bool:
    return page * page_size < total_count
