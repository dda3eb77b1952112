"""
LoanStatus Value Object
"""

from enum import Enum


class LoanStatus(str, Enum):
    """
    Loan status state machine.

    Active -> Returned (on-time return)
    Active -> Overdue  (late return, or the overdue sweep)
    Returned and Overdue are terminal.
    """

    ACTIVE = "Active"
    RETURNED = "Returned"
    OVERDUE = "Overdue"

    def is_terminal(self) -> bool:
        return self in {LoanStatus.RETURNED, LoanStatus.OVERDUE}

    def can_transition_to(self, new_state: "LoanStatus") -> bool:
        valid_transitions = {
            LoanStatus.ACTIVE: {LoanStatus.RETURNED, LoanStatus.OVERDUE},
            LoanStatus.RETURNED: set(),
            LoanStatus.OVERDUE: set(),
        }
        return new_state in valid_transitions.get(self, set())

    @classmethod
    def from_string(cls, value: str) -> "LoanStatus":
        """
        Raises:
            ValueError: If value is not a valid status
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid loan status: {value}")
