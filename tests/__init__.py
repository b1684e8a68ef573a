"""
Unit Tests for the Minichess Engine

This package contains unit tests for all engine components.

Running Tests:
    # Run all tests
    pytest tests/

    # Run specific test file
    pytest tests/test_movegen.py

    # Run with coverage
    pytest tests/ --cov=minichess --cov-report=html

    # Run specific test
    pytest tests/test_terminal.py::TestStalemate::test_stalemate

Dependencies:
    - pytest: Test framework
    - pytest-cov: Coverage reporting
"""
