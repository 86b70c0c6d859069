"""
pytest configuration for devtools-hub.
Provides a Flask test client backed by a fresh in-memory store per test.
"""

import copy
import sys
from pathlib import Path

import pytest

# Allow running the suite from a source checkout without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from devtools_hub.api.store import ToolDataStore
from devtools_hub.config.settings import DEFAULT_CONFIG
from devtools_hub.main import create_app
from devtools_hub.utils.request_helpers import STORE_EXTENSION


@pytest.fixture
def test_config():
    """Default configuration with small limits so limit handling is easy to hit."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config['data_limits'] = {'json-formatter': 3}
    config['favorites_limit'] = 3
    config['max_input_size'] = 4096
    return config


@pytest.fixture
def app(test_config):
    app = create_app(test_config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def store(app) -> ToolDataStore:
    return app.extensions[STORE_EXTENSION]
