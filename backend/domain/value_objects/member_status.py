"""
MemberStatus Value Object
"""

from enum import Enum
from typing import Optional


class MemberStatus(str, Enum):
    """
    Borrower membership state.

    Any state is reachable from any other; only Active members may borrow.
    """

    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"

    def can_borrow(self) -> bool:
        return self is MemberStatus.ACTIVE

    @classmethod
    def from_string(cls, value: str) -> "MemberStatus":
        """
        Parse a status name case-insensitively.

        Raises:
            ValueError: If value is not a valid status
        """
        status = cls.parse(value)
        if status is None:
            raise ValueError(f"Invalid member status: {value}")
        return status

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MemberStatus"]:
        """Case-insensitive lookup that returns None for unknown names."""
        if not value:
            return None
        lowered = value.strip().lower()
        for status in cls:
            if status.value.lower() == lowered:
                return status
        return None
