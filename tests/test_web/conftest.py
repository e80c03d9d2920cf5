from __future__ import annotations

import pytest

from accesslens.config import AnalyzerConfig
from accesslens.web.app import create_app


@pytest.fixture
def analyzer_config():
    return AnalyzerConfig()


@pytest.fixture
def app(analyzer_config):
    """Create a Flask app for testing."""
    application = create_app(analyzer_config=analyzer_config)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
