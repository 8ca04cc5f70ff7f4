"""Pytest configuration for the registry store tests.

Environment variables are set before any settings are loaded so tests never
pick up a developer's ``.env`` database.
"""

import os


def pytest_configure(config):
    """Configure test environment before any tests run."""
    config.addinivalue_line("markers", "security: Authentication and secret-handling tests")
    config.addinivalue_line("markers", "integration: Tests that touch a real database file")

    os.environ.setdefault("REGISTRY_ENVIRONMENT", "test")
    os.environ.setdefault("REGISTRY_BOOTSTRAP_ENABLED", "false")
