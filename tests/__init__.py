"""
Tests package for Super Fair Division.

This package contains unit and integration tests for:
- Equal-weight and weighted allocation
- Allocation invariants
- Benchmark runner and CLI
"""
