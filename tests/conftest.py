"""
pytest configuration and shared fixtures.
"""

import pytest

from tests.helpers import CountingProvider


@pytest.fixture
def counting_provider():
    return CountingProvider()


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "slow: slow tests")
