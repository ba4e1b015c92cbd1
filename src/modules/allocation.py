# =============================================================================
# FILE: src/modules/allocation.py
"""
Super Fair Division - Zero-Sum Transfers for a Single Shared Item

Every participant except the highest bidder receives their truncated
proportional share plus a fairness correction:

    delta   = trunc((n * maxV - sumV) / (n * n))
    share_i = trunc(v_i / n) + delta                (equal weights)
    share_i = (trunc(v_i / n) + delta) * w_i        (weighted, n = Σ w_i)

The highest bidder pays the sum of all other shares, so the allocation
always sums to exactly zero.

Arithmetic is exact: values are Python ints and every quotient rounds
toward zero. Pass ``int_bits`` to reject intermediates that would not fit
a fixed-width signed integer.
"""
# =============================================================================

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from src.modules.errors import (
    ErrorKind,
    FairDivisionError,
    InvalidInputError,
    NotEnoughParticipantsError,
)
from src.utils.arithmetic import WidthGuard, highest_bidder, trunc_div

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass
class DivisionBreakdown:
    """Intermediate quantities of one allocation"""
    allocations: List[int]
    n: int
    sum_v: int
    max_v: int
    argmax: int
    delta: int

    def to_dict(self) -> Dict[str, int]:
        return {
            'n': self.n,
            'sum_v': self.sum_v,
            'max_v': self.max_v,
            'argmax': self.argmax,
            'delta': self.delta,
        }


@dataclass
class AllocationResult:
    """
    Tagged outcome of an allocation request

    Attributes:
    -----------
    allocations : Optional[List[int]]
        Signed transfers, index-aligned with the valuations (None on failure)
    method : str
        'equal' or 'weighted'
    error : Optional[ErrorKind]
        Failure classification (None on success)
    error_message : Optional[str]
        Human-readable failure detail
    metadata : Dict
        n, sum_v, max_v, argmax and delta of a successful computation
    computation_time : Optional[float]
        Wall-clock time in seconds
    """
    allocations: Optional[List[int]]
    method: str
    error: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    metadata: Dict = field(default_factory=dict)
    computation_time: Optional[float] = None

    def __post_init__(self):
        if (self.allocations is None) == (self.error is None):
            raise ValueError("AllocationResult needs exactly one of allocations or error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[int]:
        """Return the allocations or raise the recorded error"""
        if self.error is not None:
            raise FairDivisionError.from_kind(self.error, self.error_message)
        return self.allocations

    def as_array(self) -> np.ndarray:
        """Allocations as an object-dtype array (keeps arbitrary precision)"""
        return np.array(self.unwrap(), dtype=object)

    def summary(self) -> str:
        """Human-readable summary"""
        lines = [f"═══ AllocationResult: {self.method} ═══"]
        if self.error is not None:
            lines.append(f"Error: {self.error.name} ({self.error_message})")
            return "\n".join(lines)

        lines.append(f"Allocations: {self.allocations}")
        lines.append(f"Total: {sum(self.allocations)}")
        if self.metadata:
            lines.append(
                f"Highest bidder: index {self.metadata['argmax']} "
                f"(value {self.metadata['max_v']}), delta={self.metadata['delta']}"
            )
        if self.computation_time is not None:
            lines.append(f"Time: {self.computation_time:.6f}s")
        return "\n".join(lines)


# =============================================================================
# INPUT COERCION
# =============================================================================

def _as_int_list(items: Sequence, name: str) -> List[int]:
    """Copy a sequence of integers into Python ints, rejecting anything else"""
    out = []
    for i, x in enumerate(items):
        if isinstance(x, (bool, np.bool_)) or not isinstance(x, (int, np.integer)):
            raise InvalidInputError(
                f"{name}[{i}] must be an integer, got {type(x).__name__}"
            )
        out.append(int(x))
    return out


# =============================================================================
# CORE ALGORITHM
# =============================================================================

def _split(values: List[int], weights: Optional[List[int]], guard: WidthGuard) -> DivisionBreakdown:
    """Shared skeleton for both allocators; inputs are already validated"""
    if weights is None:
        n = guard(len(values), 'n')
        sum_v = guard(sum(values), 'sumV')
    else:
        n = guard(sum(weights), 'n')
        sum_v = 0
        for v, w in zip(values, weights):
            sum_v = guard(sum_v + guard(v * w, 'v*w'), 'sumV')

    # maxV is the raw valuation even in the weighted variant
    argmax, max_v = highest_bidder(values)

    numerator = guard(guard(n * max_v, 'n*maxV') - sum_v, 'n*maxV-sumV')
    delta = trunc_div(numerator, guard(n * n, 'n*n'))

    allocations = [0] * len(values)
    sum_others = 0
    for i, v in enumerate(values):
        if i == argmax:
            continue
        share = guard(trunc_div(v, n) + delta, 'share')
        if weights is not None:
            share = guard(share * weights[i], 'share')
        allocations[i] = share
        sum_others = guard(sum_others + share, 'sum_others')

    allocations[argmax] = guard(-sum_others, 'allocation[argmax]')

    logger.debug(
        f"n={n} sumV={sum_v} argmax={argmax} maxV={max_v} delta={delta}"
    )
    return DivisionBreakdown(
        allocations=allocations,
        n=n,
        sum_v=sum_v,
        max_v=max_v,
        argmax=argmax,
        delta=delta,
    )


def _divide_equal(values: Sequence[int], int_bits: Optional[int] = None) -> DivisionBreakdown:
    if len(values) == 0:
        raise InvalidInputError("values must not be empty")
    values = _as_int_list(values, 'values')
    if len(values) < 2:
        raise NotEnoughParticipantsError(
            f"at least 2 participants required, got {len(values)}"
        )
    guard = WidthGuard(int_bits)
    for i, v in enumerate(values):
        guard(v, f'values[{i}]')
    return _split(values, None, guard)


def _divide_weighted(
    values: Sequence[int],
    weights: Sequence[int],
    int_bits: Optional[int] = None
) -> DivisionBreakdown:
    if len(values) == 0 or len(weights) == 0:
        raise InvalidInputError("values and weights must not be empty")
    if len(values) != len(weights):
        raise InvalidInputError(
            f"values and weights differ in length ({len(values)} vs {len(weights)})"
        )
    values = _as_int_list(values, 'values')
    weights = _as_int_list(weights, 'weights')
    if len(values) < 2:
        raise NotEnoughParticipantsError(
            f"at least 2 participants required, got {len(values)}"
        )
    for i, w in enumerate(weights):
        if w <= 0:
            raise InvalidInputError(f"weights[{i}] must be positive, got {w}")

    guard = WidthGuard(int_bits)
    for i, (v, w) in enumerate(zip(values, weights)):
        guard(v, f'values[{i}]')
        guard(w, f'weights[{i}]')
    return _split(values, weights, guard)


def allocate_equal(values: Sequence[int], int_bits: Optional[int] = None) -> List[int]:
    """
    Super fair division with every participant counting equally

    Parameters:
    -----------
    values : Sequence[int]
        Valuation of each participant
    int_bits : int, optional
        Signed width every intermediate must fit; None means unbounded

    Returns:
    --------
    List[int] of transfers summing to zero

    Raises:
    -------
    InvalidInputError
        Empty input or a non-integer valuation
    NotEnoughParticipantsError
        Fewer than two participants
    CalculationFailedError
        An intermediate overflowed ``int_bits``

    Example:
    --------
    >>> allocate_equal([10, 50])
    [15, -15]
    """
    return _divide_equal(values, int_bits).allocations


def allocate_weighted(
    values: Sequence[int],
    weights: Sequence[int],
    int_bits: Optional[int] = None
) -> List[int]:
    """
    Super fair division with positive integer weights (vote counts)

    The virtual population is n = Σ weights and the weighted sum is
    Σ v_i * w_i. The highest bidder is chosen on raw valuations.

    Raises the same errors as allocate_equal, plus InvalidInputError for
    mismatched lengths or a weight <= 0.

    Example:
    --------
    >>> allocate_weighted([30, 60], [1, 2])
    [13, -13]
    """
    return _divide_weighted(values, weights, int_bits).allocations


# =============================================================================
# ENGINE
# =============================================================================

class SuperFairDivisionEngine:
    """
    Single entry point returning tagged results instead of raising

    Holds only immutable configuration, so one engine may be shared by
    any number of callers.
    """

    def __init__(self, int_bits: Optional[int] = None):
        """
        Parameters:
        -----------
        int_bits : int, optional
            Signed integer width enforced on intermediates (e.g. 128)
        """
        WidthGuard(int_bits)
        self.int_bits = int_bits
        logger.info(f"SuperFairDivisionEngine initialized (int_bits={int_bits})")

    def allocate(
        self,
        values: Sequence[int],
        weights: Optional[Sequence[int]] = None
    ) -> AllocationResult:
        """Equal-weight division when ``weights`` is None, weighted otherwise"""
        method = 'equal' if weights is None else 'weighted'
        start = time.perf_counter()
        try:
            if weights is None:
                breakdown = _divide_equal(values, self.int_bits)
            else:
                breakdown = _divide_weighted(values, weights, self.int_bits)
        except FairDivisionError as e:
            logger.warning(f"{method} allocation rejected: {e.kind.name} ({e.message})")
            return AllocationResult(
                allocations=None,
                method=method,
                error=e.kind,
                error_message=e.message,
                computation_time=time.perf_counter() - start,
            )

        return AllocationResult(
            allocations=breakdown.allocations,
            method=method,
            metadata=breakdown.to_dict(),
            computation_time=time.perf_counter() - start,
        )
