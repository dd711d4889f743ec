"""
Pytest configuration and shared fixtures for all tests.
"""

import json
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest
import requests  # type: ignore

# Add src to sys.path so the package imports without installation
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from tmdb_login.api import TMDBAPI  # noqa: E402
from tmdb_login.services import CredentialStore, PresentationAdapter  # noqa: E402


def build_response(status=200, body=None, raw=None):
    """Build a real requests.Response carrying a JSON body (or raw bytes)."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    response.url = "https://api.example.test/3/fixture"
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    return response


class RecordingPresenter(PresentationAdapter):
    """Presenter that records every notification in order."""

    def __init__(self):
        self.events = []

    def on_progress(self, stage):
        self.events.append(("progress", stage))

    def on_failure(self, stage, message):
        self.events.append(("failure", stage, message))

    def on_success(self, user_id, session_id):
        self.events.append(("success", user_id, session_id))

    @property
    def progress(self):
        return [event[1] for event in self.events if event[0] == "progress"]


@pytest.fixture
def make_response():
    """Factory for fixture HTTP responses."""
    return build_response


@pytest.fixture
def happy_responses():
    """The four successful handshake responses."""
    return [
        build_response(body={"success": True, "request_token": "T1"}),
        build_response(body={"success": True, "request_token": "T1"}),
        build_response(body={"success": True, "session_id": "S1"}),
        build_response(body={"id": 42, "username": "movie_fan"}),
    ]


@pytest.fixture
def api():
    """TMDB client whose HTTP session is a Mock."""
    client = TMDBAPI(api_key="test-key", base_url="https://api.example.test/3")
    client.session.request = Mock()
    yield client
    client.close()


@pytest.fixture
def store():
    return CredentialStore()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return a function producing its path."""

    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )
