"""Test package for store-density.

This package contains:
- Unit tests (test_spatial.py, test_scoring.py, test_stores.py, test_config.py, test_schemas.py)
- Integration tests (test_integration.py)
- Shared fixtures (conftest.py)
"""
