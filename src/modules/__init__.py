"""
Modules package for Super Fair Division.

This package contains core modules for:
- Allocation: equal-weight and weighted super fair division
- Errors: the shared error taxonomy
- Benchmark running: timing sweeps over participant counts
"""

from .errors import (
    ErrorKind,
    FairDivisionError,
    InvalidInputError,
    NotEnoughParticipantsError,
    CalculationFailedError
)
from .allocation import (
    AllocationResult,
    SuperFairDivisionEngine,
    allocate_equal,
    allocate_weighted
)
from .runner import BenchmarkCase, BenchmarkConfig, BenchmarkRunner

__all__ = [
    'ErrorKind',
    'FairDivisionError',
    'InvalidInputError',
    'NotEnoughParticipantsError',
    'CalculationFailedError',
    'AllocationResult',
    'SuperFairDivisionEngine',
    'allocate_equal',
    'allocate_weighted',
    'BenchmarkCase',
    'BenchmarkConfig',
    'BenchmarkRunner'
]
