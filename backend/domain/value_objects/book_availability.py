"""
BookAvailability Value Object

Lending state of a catalog copy.
"""

from enum import Enum


class BookAvailability(str, Enum):
    """
    Book availability state machine.

    Available is the initial state. Borrowed and Reserved can only be
    entered from Available; Maintenance can be entered from anywhere and
    every state can return to Available.
    """

    AVAILABLE = "Available"
    BORROWED = "Borrowed"
    RESERVED = "Reserved"
    MAINTENANCE = "Maintenance"

    def is_lendable(self) -> bool:
        return self is BookAvailability.AVAILABLE

    def can_transition_to(self, new_state: "BookAvailability") -> bool:
        """
        Check if transition to new state is valid.

        Staying in the same state is always allowed (it is a no-op).
        """
        if new_state is self:
            return True

        valid_transitions = {
            BookAvailability.AVAILABLE: {
                BookAvailability.BORROWED,
                BookAvailability.RESERVED,
                BookAvailability.MAINTENANCE,
            },
            BookAvailability.BORROWED: {BookAvailability.AVAILABLE, BookAvailability.MAINTENANCE},
            BookAvailability.RESERVED: {BookAvailability.AVAILABLE, BookAvailability.MAINTENANCE},
            BookAvailability.MAINTENANCE: {BookAvailability.AVAILABLE},
        }
        return new_state in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "BookAvailability":
        """
        Raises:
            ValueError: If value is not a valid availability
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid book availability: {value}")
