"""
Super Fair Division Package.

This package provides implementations for:
- Equal-weight and weighted super fair division with exact integer arithmetic
- Allocation invariant checks
- Benchmarking of both allocators
"""

# Import core modules for easy access
from .modules import (
    AllocationResult,
    BenchmarkConfig,
    BenchmarkRunner,
    CalculationFailedError,
    ErrorKind,
    FairDivisionError,
    InvalidInputError,
    NotEnoughParticipantsError,
    SuperFairDivisionEngine,
    allocate_equal,
    allocate_weighted,
)
from .utils import ExperimentLogger, trunc_div

__all__ = [
    # Core modules
    'allocate_equal',
    'allocate_weighted',
    'AllocationResult',
    'SuperFairDivisionEngine',
    'ErrorKind',
    'FairDivisionError',
    'InvalidInputError',
    'NotEnoughParticipantsError',
    'CalculationFailedError',
    'BenchmarkConfig',
    'BenchmarkRunner',
    'ExperimentLogger',
    'trunc_div'
]

__version__ = "1.0.0"
