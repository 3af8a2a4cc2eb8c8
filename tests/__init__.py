"""Test suite for licensekit.

Test organization:
- fixtures/: Source tree and build description generators
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
