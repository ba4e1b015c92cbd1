"""
Validation utilities for super fair division allocations
"""
from typing import Any, Dict, Optional, Sequence
from dataclasses import dataclass
import logging

from src.utils.arithmetic import highest_bidder

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check"""
    is_valid: bool
    error: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class AllocationValidator:
    """
    Checks the structural invariants every successful allocation satisfies
    """

    def validate_zero_sum(self, allocations: Sequence[int]) -> ValidationResult:
        """
        Validate conservation: Σ allocation_i == 0 exactly

        Args:
            allocations: Computed transfers

        Returns:
            ValidationResult with validation status
        """
        total = sum(int(a) for a in allocations)
        if total != 0:
            return ValidationResult(
                is_valid=False,
                error=f"Zero-sum violation: sum(x)={total}",
                details={'allocation_sum': total}
            )
        return ValidationResult(is_valid=True)

    def validate_length(
        self,
        values: Sequence[int],
        allocations: Sequence[int]
    ) -> ValidationResult:
        """Validate one transfer per participant"""
        if len(values) != len(allocations):
            return ValidationResult(
                is_valid=False,
                error=f"Length mismatch: {len(values)} values but {len(allocations)} allocations"
            )
        return ValidationResult(is_valid=True)

    def validate_balancing_identity(
        self,
        values: Sequence[int],
        allocations: Sequence[int]
    ) -> ValidationResult:
        """
        Validate that the highest bidder pays exactly what everyone else receives

        Args:
            values: Valuations the allocation was computed from
            allocations: Computed transfers

        Returns:
            ValidationResult with validation status
        """
        if len(values) == 0:
            return ValidationResult(
                is_valid=False,
                error="Balancing violation: no participants"
            )
        argmax, _ = highest_bidder(values)
        others = sum(int(a) for i, a in enumerate(allocations) if i != argmax)
        if int(allocations[argmax]) != -others:
            return ValidationResult(
                is_valid=False,
                error=f"Balancing violation: allocation[{argmax}]={allocations[argmax]} != -{others}",
                details={'argmax': argmax, 'sum_others': others}
            )
        return ValidationResult(is_valid=True, details={'argmax': argmax})

    def validate_all(
        self,
        values: Sequence[int],
        allocations: Sequence[int]
    ) -> Dict[str, Any]:
        """Run every check and summarise"""
        results = {
            'length': self.validate_length(values, allocations),
        }
        # The other checks index by participant, so they need aligned lengths
        if results['length'].is_valid:
            results['zero_sum'] = self.validate_zero_sum(allocations)
            results['balancing_identity'] = self.validate_balancing_identity(values, allocations)

        results['all_valid'] = all(r.is_valid for r in results.values())
        if not results['all_valid']:
            failed = [name for name, r in results.items()
                      if isinstance(r, ValidationResult) and not r.is_valid]
            logger.warning(f"Allocation failed checks: {failed}")
        return results


# Global instance for easy use
allocation_validator = AllocationValidator()
