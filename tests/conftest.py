"""
Shared fixtures for the test suite.

The API fixtures build the app with explicit Settings and swap the real
dispatcher for an AsyncMock, so no test ever reaches the Gemini API.
"""

import io
import pytest
from unittest.mock import AsyncMock, Mock
from fastapi.testclient import TestClient
from PIL import Image

from gemini_relay.api.main import create_app
from gemini_relay.api.dependencies.state import app_state, get_dispatcher, get_settings
from gemini_relay.config import Settings
from gemini_relay.models.dispatcher import InferenceDispatcher


@pytest.fixture(autouse=True)
def clean_app_state():
    app_state.clear()
    yield
    app_state.clear()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(upload_dir):
    return Settings(api_key="test-key", upload_dir=upload_dir, max_upload_bytes=1024 * 1024)


@pytest.fixture
def mock_dispatcher():
    dispatcher = Mock(spec=InferenceDispatcher)
    dispatcher.model = "models/gemini-1.5-flash"
    dispatcher.generate = AsyncMock(return_value="generated text")
    dispatcher.get_stats.return_value = {"total_calls": 0}
    return dispatcher


@pytest.fixture
def app(settings, mock_dispatcher):
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_dispatcher] = lambda: mock_dispatcher
    return app


@pytest.fixture
def client(app):
    """Test client without lifespan, so the real Gemini client is never built."""
    return TestClient(app)


@pytest.fixture
def jpeg_bytes():
    """A small real JPEG image."""
    img = Image.new('RGB', (32, 32), color='red')
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG')
    return buffer.getvalue()
