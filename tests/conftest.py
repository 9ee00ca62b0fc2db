import json
from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from api.main import app, get_http_transport, limiter
from config import Settings, get_settings

TEST_BASE_URL = "https://sarvam.test"


def make_settings(**overrides) -> Settings:
    values = {
        "SARVAM_API_KEY": "test-key",
        "SARVAM_BASE_URL": TEST_BASE_URL,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeSarvam:
    """
    In-process stand-in for the Sarvam HTTP API

    Records every request and answers through per-endpoint handlers that
    tests can replace. Handlers receive the decoded JSON payload.
    """

    def __init__(self):
        self.calls: List[Dict] = []
        self.translate_handler: Callable[[dict], httpx.Response] = self.default_translate
        self.tts_handler: Callable[[dict], httpx.Response] = self.default_tts

    @staticmethod
    def default_translate(payload: dict) -> httpx.Response:
        return httpx.Response(
            200,
            json={"translated_text": f"<{payload['target_language_code']}> {payload['input']}"},
        )

    @staticmethod
    def default_tts(payload: dict) -> httpx.Response:
        return httpx.Response(200, json={"audios": ["UklGRiQAAABXQVZF"]})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.calls.append({
            "path": request.url.path,
            "payload": payload,
            "headers": dict(request.headers),
        })
        if request.url.path == "/translate":
            return self.translate_handler(payload)
        if request.url.path == "/text-to-speech":
            return self.tts_handler(payload)
        return httpx.Response(404, json={"error": "unknown endpoint"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def calls_to(self, path: str) -> List[Dict]:
        return [call for call in self.calls if call["path"] == path]


@pytest.fixture
def fake_sarvam():
    return FakeSarvam()


@pytest.fixture
def test_settings():
    return make_settings()


@pytest.fixture
def client(fake_sarvam, test_settings):
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_http_transport] = lambda: fake_sarvam.transport
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
