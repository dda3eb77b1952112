"""
BookCategory Value Object

The closed set of catalog categories.
"""

from enum import Enum


class BookCategory(str, Enum):
    """Catalog category; values are the display names stored in the database."""

    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"
    SCIENCE = "Science"
    TECHNOLOGY = "Technology"
    BIOGRAPHY = "Biography"
    HISTORY = "History"
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    CHILDREN = "Children"
    REFERENCE = "Reference"
    TEXTBOOK = "Textbook"
    POETRY = "Poetry"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    SCIENCE_FICTION = "Science Fiction"

    @classmethod
    def from_string(cls, value: str) -> "BookCategory":
        """
        Create BookCategory from its display name.

        Matching is exact (case-sensitive).

        Raises:
            ValueError: If value is not a known category
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid category: {value}")

    @classmethod
    def names(cls) -> list[str]:
        return [category.value for category in cls]
