"""
Pytest configuration for adlocator tests.

Async tests are marked with ``pytest.mark.asyncio`` (pytest-asyncio).
"""

import random
import tempfile
from typing import Generator

import pytest

from adlocator.logging import LoggingConfig
from tests.unit.mocks import MockResolverFactory


@pytest.fixture
def resolver_factory() -> MockResolverFactory:
    return MockResolverFactory()


@pytest.fixture
def seeded_random() -> random.Random:
    return random.Random(2782)


@pytest.fixture
def temp_log_directory() -> Generator[str, None, None]:
    with tempfile.TemporaryDirectory() as temp_directory:
        yield temp_directory


@pytest.fixture(autouse=True)
def quiet_logging() -> Generator[LoggingConfig, None, None]:
    config = LoggingConfig()
    level = config.level
    config.update(log_level="critical")

    yield config

    config.update(log_level=level.value.lower())
