"""
Fusion Summary Test Suite

Tests for the fusion summary workflow, which counts subtype-defining gene
fusions per specimen for molecular subtyping.

Test Organization:
- test_fusion_filter.py: Unit tests for fusion selection
- test_specimen_universe.py: Unit tests for the caller specimen union
- test_summary_matrix.py: Unit tests for pivoting and zero-filling
- test_utils.py: Unit tests for I/O and logging utilities
- test_integration.py: End-to-end tests of the summary run

Run tests with:
    pytest                      # Run all tests
    pytest -v                   # Verbose output
    pytest tests/test_summary_matrix.py  # Run specific file
    pytest -m "not slow"       # Skip slow tests
    pytest -m integration      # Run only integration tests
"""
