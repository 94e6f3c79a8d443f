"""
Shared fixtures.
"""

import pytest

from daterange.config import RangeConfig, configure


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the default configuration."""
    previous = configure(RangeConfig())
    yield
    configure(previous)
