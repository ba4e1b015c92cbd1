"""
Utilities package for Super Fair Division.

This package contains utility modules for:
- Arithmetic: truncating division and fixed-width overflow checks
- Logging: experiment logger for benchmark runs
- Metrics: timing statistics
- Validation: allocation invariant checks
"""

from .arithmetic import WidthGuard, highest_bidder, trunc_div
from .logging_utils import ExperimentLogger
from .metrics import compute_confidence_interval, summarize_timings
from .validation import AllocationValidator, ValidationResult

__all__ = [
    'WidthGuard',
    'highest_bidder',
    'trunc_div',
    'ExperimentLogger',
    'compute_confidence_interval',
    'summarize_timings',
    'AllocationValidator',
    'ValidationResult'
]
