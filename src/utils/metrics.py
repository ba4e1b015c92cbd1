# =============================================================================
# FILE: src/utils/metrics.py
"""
Timing statistics for benchmark runs

Priority: MEDIUM | Status: Production-Ready
Version: 1.0.0
"""
import numpy as np
from typing import Dict, Tuple
from scipy import stats
import logging

logger = logging.getLogger(__name__)


def compute_confidence_interval(
    data: np.ndarray,
    confidence: float = 0.95
) -> Tuple[float, float]:
    """
    Compute confidence interval for data using t-distribution

    Args:
        data: Input data array
        confidence: Confidence level (default 0.95 for 95% CI)

    Returns:
        Tuple of (lower_bound, upper_bound); a single sample collapses to its value
    """
    data = np.asarray(data, dtype=float)
    n = len(data)
    mean = float(np.mean(data))
    if n < 2:
        return mean, mean

    std_err = stats.sem(data)  # Standard error of the mean

    # Calculate t-value for the given confidence level
    t_value = stats.t.ppf((1 + confidence) / 2, df=n - 1)

    margin_error = float(t_value * std_err)
    return mean - margin_error, mean + margin_error


def summarize_timings(timings: np.ndarray, confidence: float = 0.95) -> Dict[str, float]:
    """Mean, spread and CI of a set of wall-clock timings (seconds)"""
    timings = np.asarray(timings, dtype=float)
    ci_low, ci_high = compute_confidence_interval(timings, confidence)
    return {
        'mean_s': float(np.mean(timings)),
        'std_s': float(np.std(timings)),
        'min_s': float(np.min(timings)),
        'max_s': float(np.max(timings)),
        'ci_low_s': ci_low,
        'ci_high_s': ci_high,
    }
