"""
Pytest configuration and fixtures for tagnotes tests
"""

import json
import os

import httpx
import pytest

from core.config import AppSettings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep the developer's TAGNOTES_* env vars and .env files out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("TAGNOTES_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setitem(AppSettings.model_config, "env_file", None)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_tags_payload():
    """Tag listing as returned by GitLab (extra keys included)."""
    return [
        {"name": "v1.0.0", "message": "First release", "target": "a1b2c3d", "protected": False},
        {"name": "v1.2.0", "message": "Second release", "target": "b2c3d4e", "protected": False},
        {"name": "nightly", "message": None, "target": "c3d4e5f", "protected": False},
        {"name": "v0.9.0", "message": "Beta", "target": "d4e5f6a", "protected": False},
    ]


@pytest.fixture
def tags_transport(sample_tags_payload):
    """MockTransport answering the tag listing; requests are kept on `.requests`."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, text=json.dumps(sample_tags_payload))

    transport = httpx.MockTransport(handler)
    transport.requests = requests
    return transport
