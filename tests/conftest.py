"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
Shared record builders live in tests/fixtures/match_fixtures.py.
"""

import os
import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "scenario: end-to-end scoring scenarios with known expected scores"
    )
    config.addinivalue_line(
        "markers", "cli: tests that drive main.py"
    )


@pytest.fixture(autouse=True)
def clear_jobmatch_env(monkeypatch):
    """Keep JOBMATCH_* overrides from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("JOBMATCH_"):
            monkeypatch.delenv(key, raising=False)
