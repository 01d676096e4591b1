from __future__ import annotations

import io
import json
from urllib import error

import pytest

from gemini_interpreter.config import GenerationConfig, Settings
from gemini_interpreter.llm import GeminiAdapter, LLMError, create_generation_client
from gemini_interpreter.llm import gemini_adapter
from gemini_interpreter.llm.gemini_adapter import build_request_body
from tests.helpers import make_raw

pytestmark = pytest.mark.unit

CONFIG = GenerationConfig(
    temperature=0.5, max_tokens=200, model="gemini-pro", credential="test-api-key"
)


class _FakeResponse(io.BytesIO):
    def __enter__(self) -> _FakeResponse:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def test_build_request_body() -> None:
    body = build_request_body("Olá", CONFIG)

    assert body == {
        "contents": [{"parts": [{"text": "Olá"}]}],
        "generationConfig": {"temperature": 0.5, "maxOutputTokens": 200},
    }


def test_generate_posts_and_returns_raw_body(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def _urlopen(req, timeout):
        captured["url"] = req.full_url
        captured["headers"] = dict(req.header_items())
        captured["body"] = json.loads(req.data.decode("utf-8"))
        captured["timeout"] = timeout
        return _FakeResponse(make_raw("oi").encode("utf-8"))

    monkeypatch.setattr(gemini_adapter.request, "urlopen", _urlopen)
    adapter = GeminiAdapter(base_url="https://example.test/v1beta/", timeout_seconds=7)

    raw = adapter.generate("Olá", CONFIG)

    assert raw == make_raw("oi")
    assert captured["url"] == "https://example.test/v1beta/models/gemini-pro:generateContent"
    assert captured["headers"]["X-goog-api-key"] == "test-api-key"
    assert "test-api-key" not in captured["url"]
    assert captured["body"]["generationConfig"]["maxOutputTokens"] == 200
    assert captured["timeout"] == 7


def test_generate_wraps_http_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    def _urlopen(req, timeout):
        raise error.HTTPError(
            req.full_url, 429, "Too Many Requests", {}, io.BytesIO(b"quota")
        )

    monkeypatch.setattr(gemini_adapter.request, "urlopen", _urlopen)

    with pytest.raises(LLMError, match="HTTP 429: quota"):
        GeminiAdapter().generate("Olá", CONFIG)


@pytest.mark.parametrize(
    ("raised", "message"),
    [
        (error.URLError("connection refused"), "connection refused"),
        (TimeoutError(), "timed out"),
    ],
)
def test_generate_wraps_network_errors(
    monkeypatch: pytest.MonkeyPatch, raised: Exception, message: str
) -> None:
    def _urlopen(req, timeout):
        raise raised

    monkeypatch.setattr(gemini_adapter.request, "urlopen", _urlopen)

    with pytest.raises(LLMError, match=message):
        GeminiAdapter().generate("Olá", CONFIG)


def test_create_generation_client_uses_settings() -> None:
    settings = Settings(gemini_base_url="https://example.test/api", timeout_seconds=5)

    client = create_generation_client(settings)

    assert isinstance(client, GeminiAdapter)
    assert client.base_url == "https://example.test/api"
    assert client.timeout_seconds == 5
