"""Shared pytest configuration and fixtures for compositree tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from compositree.testing import build_reference_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running tests excluded by run_tests.py")


@pytest.fixture
def reference_tree():
    """root{a=5, b=3, sub{c=2}}"""
    return build_reference_tree()
