"""
Exact integer helpers (deterministic, integer-only).

Python's ``//`` floors toward negative infinity; the allocation formulas need
round-toward-zero division, so every quotient goes through ``trunc_div``.
"""
from typing import Optional, Sequence, Tuple

from src.modules.errors import CalculationFailedError


def highest_bidder(values: Sequence[int]) -> Tuple[int, int]:
    """
    Return (index, value) of the maximal valuation.

    Only a strictly greater value moves the index, so ties keep the
    earliest participant.
    """
    max_index = 0
    max_value = values[0]
    for i, v in enumerate(values):
        if v > max_value:
            max_value = v
            max_index = i
    return max_index, max_value


def trunc_div(a: int, b: int) -> int:
    """
    Integer division rounding toward zero.

    trunc_div(-7, 3) == -2 whereas -7 // 3 == -3.
    """
    if b == 0:
        raise ZeroDivisionError("trunc_div by zero")
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


class WidthGuard:
    """
    Checks intermediates against a signed two's-complement width

    With ``int_bits=None`` every value is accepted (arbitrary precision).
    """

    def __init__(self, int_bits: Optional[int] = None):
        if int_bits is not None and int_bits < 2:
            raise ValueError(f"int_bits must be >= 2, got {int_bits}")
        self.int_bits = int_bits
        if int_bits is None:
            self.min_value = None
            self.max_value = None
        else:
            self.max_value = (1 << (int_bits - 1)) - 1
            self.min_value = -(1 << (int_bits - 1))

    def __call__(self, value: int, label: str) -> int:
        if self.int_bits is not None and not (self.min_value <= value <= self.max_value):
            raise CalculationFailedError(
                f"{label}={value} overflows signed {self.int_bits}-bit integer"
            )
        return value
