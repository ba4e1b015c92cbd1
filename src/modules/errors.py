# =============================================================================
# FILE: src/modules/errors.py
"""
Error taxonomy shared by the equal-weight and weighted allocators
"""
# =============================================================================

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Classification of allocation failures"""
    INVALID_INPUT = "invalid_input"
    NOT_ENOUGH_PARTICIPANTS = "not_enough_participants"
    CALCULATION_FAILED = "calculation_failed"


class FairDivisionError(ValueError):
    """
    Base class for allocation failures

    Every subclass pins ``kind`` so callers can branch on the ErrorKind
    instead of the exception type.
    """
    kind: ErrorKind = ErrorKind.CALCULATION_FAILED

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.kind.value)
        self.message = message or self.kind.value

    @staticmethod
    def from_kind(kind: ErrorKind, message: Optional[str] = None) -> "FairDivisionError":
        """Build the exception matching an ErrorKind"""
        return _EXCEPTION_BY_KIND[kind](message)


class InvalidInputError(FairDivisionError):
    """Empty input, mismatched lengths, non-integer entries or non-positive weights"""
    kind = ErrorKind.INVALID_INPUT


class NotEnoughParticipantsError(FairDivisionError):
    """Fewer than two participants"""
    kind = ErrorKind.NOT_ENOUGH_PARTICIPANTS


class CalculationFailedError(FairDivisionError):
    """An intermediate value left the configured integer width"""
    kind = ErrorKind.CALCULATION_FAILED


_EXCEPTION_BY_KIND = {
    ErrorKind.INVALID_INPUT: InvalidInputError,
    ErrorKind.NOT_ENOUGH_PARTICIPANTS: NotEnoughParticipantsError,
    ErrorKind.CALCULATION_FAILED: CalculationFailedError,
}
