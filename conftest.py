"""
pytest configuration for Utility Toolbox.
Puts src/ on the import path and provides Flask client fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add the src directory so tests can import the packages directly
SRC_PATH = Path(__file__).parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def activity_store():
    """The shared activity store, emptied before and after each test."""
    from tracking.activity import activity_store as store
    store.reset()
    yield store
    store.reset()


@pytest.fixture
def app(activity_store):
    """Application built from default configuration."""
    from config.settings import DEFAULTS
    from main import create_app
    application = create_app(dict(DEFAULTS))
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
