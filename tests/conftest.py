"""Pytest configuration and shared fixtures."""

import logging
from unittest.mock import Mock, patch

import pytest

from pyomdb.api.client import OmdbClient
from pyomdb.models.config import Config
from pyomdb.utils.error_handler import ErrorHandler
from tests.fixtures.mock_data import MockDataGenerator


# Configure logging for tests
logging.getLogger().setLevel(logging.WARNING)


@pytest.fixture(autouse=True)
def disable_network_requests():
    """Disable actual network requests during tests."""
    with patch('requests.Session.get') as mock_get, \
         patch('aiohttp.ClientSession.get') as mock_aiohttp_get:

        mock_get.side_effect = AssertionError("Unexpected network access via requests")
        mock_aiohttp_get.side_effect = AssertionError("Unexpected network access via aiohttp")

        yield {
            'requests_get': mock_get,
            'aiohttp_get': mock_aiohttp_get
        }


@pytest.fixture(autouse=True)
def clear_omdb_env(monkeypatch):
    """Keep developer environment settings out of tests."""
    for name in ('OMDB_API_KEY', 'OMDB_BASE_URL', 'OMDB_TIMEOUT', 'PYOMDB_LOG_LEVEL', 'PYOMDB_CONFIG'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_application_logging."""
    yield
    logger = logging.getLogger('pyomdb')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def config():
    """Client configuration with a test API key."""
    return Config(api_key="test-key")


@pytest.fixture
def mock_http_client():
    """Transport double; set ``get.return_value`` per test."""
    http_client = Mock()
    http_client.get.return_value = MockDataGenerator.http_response(MockDataGenerator.RUSH_SEARCH)
    return http_client


@pytest.fixture
def error_handler():
    return ErrorHandler()


@pytest.fixture
def client(config, mock_http_client, error_handler):
    """OmdbClient wired to the transport double."""
    return OmdbClient(config=config, http_client=mock_http_client, error_handler=error_handler)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests"
    )
    config.addinivalue_line(
        "markers", "network: Tests that require network access"
    )
