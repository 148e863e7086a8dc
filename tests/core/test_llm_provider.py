from __future__ import annotations

import io
import json
from urllib.error import HTTPError, URLError

import pytest

from libs.core import llm_provider as llm_provider_module
from libs.core.llm_provider import (
    LLMProviderError,
    MockLLMProvider,
    OpenAIProvider,
    resolve_provider,
)

_MESSAGES = [
    {"role": "system", "content": "You are an expert HR recruiter and resume evaluator."},
    {"role": "user", "content": "Occupation: Backend Engineer"},
]


class _FakeHTTPResponse:
    def __init__(self, payload: dict) -> None:
        self._raw = json.dumps(payload).encode("utf-8")

    def read(self) -> bytes:
        return self._raw

    def __enter__(self) -> "_FakeHTTPResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


def _success_payload(content: str = '{"score":90}') -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def test_openai_provider_sends_chat_completion_in_json_mode(monkeypatch) -> None:
    captured: list = []

    def _fake_urlopen(request, timeout=0):  # type: ignore[no-untyped-def]
        captured.append((request, timeout))
        return _FakeHTTPResponse(_success_payload())

    monkeypatch.setattr(llm_provider_module, "urlopen", _fake_urlopen)

    provider = OpenAIProvider(api_key="test-key", timeout_s=12.5)
    response = provider.generate(_MESSAGES)

    assert response.content == '{"score":90}'
    assert len(captured) == 1
    request, timeout = captured[0]
    body = json.loads(request.data.decode("utf-8"))
    assert request.full_url == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-key"
    assert timeout == 12.5
    assert body["model"] == "gpt-4o-mini"
    assert body["response_format"] == {"type": "json_object"}
    assert body["messages"] == _MESSAGES


def test_openai_provider_surfaces_http_error_without_retry(monkeypatch) -> None:
    calls = {"count": 0}

    def _fake_urlopen(request, timeout=0):  # type: ignore[no-untyped-def]
        calls["count"] += 1
        raise HTTPError(
            url="https://api.openai.com/v1/chat/completions",
            code=401,
            msg="Unauthorized",
            hdrs=None,
            fp=io.BytesIO(b'{"error":{"message":"Incorrect API key provided"}}'),
        )

    monkeypatch.setattr(llm_provider_module, "urlopen", _fake_urlopen)

    with pytest.raises(LLMProviderError) as excinfo:
        OpenAIProvider(api_key="bad-key").generate(_MESSAGES)

    assert calls["count"] == 1
    assert excinfo.value.status_code == 401
    assert excinfo.value.message == "OpenAI API error: Incorrect API key provided"


def test_openai_provider_server_error_is_not_retried(monkeypatch) -> None:
    calls = {"count": 0}

    def _fake_urlopen(request, timeout=0):  # type: ignore[no-untyped-def]
        calls["count"] += 1
        raise HTTPError(
            url="https://api.openai.com/v1/chat/completions",
            code=503,
            msg="Service Unavailable",
            hdrs=None,
            fp=io.BytesIO(b"upstream overloaded"),
        )

    monkeypatch.setattr(llm_provider_module, "urlopen", _fake_urlopen)

    with pytest.raises(LLMProviderError) as excinfo:
        OpenAIProvider(api_key="test-key").generate(_MESSAGES)

    assert calls["count"] == 1
    assert excinfo.value.status_code == 503
    assert "upstream overloaded" in excinfo.value.message


def test_openai_provider_connection_error(monkeypatch) -> None:
    def _fake_urlopen(request, timeout=0):  # type: ignore[no-untyped-def]
        raise URLError("Name or service not known")

    monkeypatch.setattr(llm_provider_module, "urlopen", _fake_urlopen)

    with pytest.raises(LLMProviderError) as excinfo:
        OpenAIProvider(api_key="test-key").generate(_MESSAGES)

    assert excinfo.value.status_code is None
    assert "connection error" in excinfo.value.message


def test_openai_provider_rejects_empty_choices(monkeypatch) -> None:
    monkeypatch.setattr(
        llm_provider_module,
        "urlopen",
        lambda request, timeout=0: _FakeHTTPResponse({"choices": []}),
    )

    with pytest.raises(LLMProviderError, match="empty output"):
        OpenAIProvider(api_key="test-key").generate(_MESSAGES)


def test_resolve_provider() -> None:
    assert isinstance(resolve_provider("mock"), MockLLMProvider)
    provider = resolve_provider("openai", api_key="k", model="gpt-4o-mini", timeout_s=5)
    assert isinstance(provider, OpenAIProvider)
    assert provider.timeout_s == 5
    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        resolve_provider("openai", api_key="")
    with pytest.raises(ValueError, match="Unknown LLM_PROVIDER"):
        resolve_provider("anthropic-ish")


def test_mock_provider_returns_json_evaluation() -> None:
    content = MockLLMProvider().generate(_MESSAGES).content
    assert json.loads(content)["score"] == 50
