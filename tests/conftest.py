"""
Pytest configuration and fixtures for request-descriptor tests.
"""

import pytest
import responses as responses_lib

from request_descriptor.core.config import ExecutorConfig
from request_descriptor.core.descriptor import RequestDescriptor
from request_descriptor.core.executor import RequestExecutor


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def executor(base_url):
    """Executor bound to the test base URL."""
    executor = RequestExecutor(ExecutorConfig(base_url=base_url))
    yield executor
    executor.close()


@pytest.fixture
def descriptor():
    """Empty GET descriptor with a path placeholder."""
    return RequestDescriptor("GET", "/users/{id}")
