from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com"
JSON_OBJECT_FORMAT = "json_object"

_MOCK_EVALUATION = {
    "score": 50,
    "summary": "Mock evaluation.",
    "strengths": [],
    "weaknesses": [],
    "missing_keywords": [],
    "rewrite_suggestions": [],
}


@dataclass
class LLMResponse:
    content: str


class LLMProviderError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LLMProvider:
    model: str = ""

    def generate(
        self,
        messages: List[Dict[str, str]],
        response_format: Optional[str] = JSON_OBJECT_FORMAT,
    ) -> LLMResponse:  # pragma: no cover - interface
        raise NotImplementedError


class MockLLMProvider(LLMProvider):
    model = "mock"

    def __init__(self, content: Optional[str] = None) -> None:
        self.content = content if content is not None else json.dumps(_MOCK_EVALUATION)

    def generate(
        self,
        messages: List[Dict[str, str]],
        response_format: Optional[str] = JSON_OBJECT_FORMAT,
    ) -> LLMResponse:
        return LLMResponse(content=self.content)


class OpenAIProvider(LLMProvider):
    """Single-attempt client for the OpenAI chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        timeout_s: float = 60.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    def generate(
        self,
        messages: List[Dict[str, str]],
        response_format: Optional[str] = JSON_OBJECT_FORMAT,
    ) -> LLMResponse:
        payload: Dict[str, Any] = {"model": self.model, "messages": messages}
        if response_format:
            payload["response_format"] = {"type": response_format}
        request = Request(
            f"{self.base_url}/v1/chat/completions",
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            method="POST",
        )
        try:
            with urlopen(request, timeout=self.timeout_s) as response:
                body = response.read().decode("utf-8")
        except HTTPError as exc:
            detail = exc.read().decode("utf-8") if exc.fp else str(exc)
            raise LLMProviderError(
                f"OpenAI API error: {_error_message(detail)}", status_code=exc.code
            ) from exc
        except (URLError, TimeoutError) as exc:
            raise LLMProviderError(f"OpenAI API connection error: {exc}") from exc
        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise LLMProviderError(f"OpenAI API returned invalid JSON: {exc}") from exc
        text = _extract_message_content(data)
        if not text:
            raise LLMProviderError("OpenAI API returned empty output")
        return LLMResponse(content=text)


def resolve_provider(
    provider_name: str,
    *,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout_s: Optional[float] = None,
) -> LLMProvider:
    name = (provider_name or "openai").lower()
    if name == "mock":
        return MockLLMProvider()
    if name != "openai":
        raise ValueError(f"Unknown LLM_PROVIDER: {provider_name}")
    if not api_key:
        raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai")
    return OpenAIProvider(
        api_key=api_key,
        model=model or DEFAULT_OPENAI_MODEL,
        base_url=base_url or DEFAULT_OPENAI_BASE_URL,
        timeout_s=timeout_s or 60.0,
    )


def _extract_message_content(response: Dict[str, Any]) -> str:
    choices = response.get("choices") if isinstance(response, dict) else None
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""


def _error_message(detail: str) -> str:
    # OpenAI wraps failures as {"error": {"message": ...}}
    try:
        data = json.loads(detail)
    except (json.JSONDecodeError, TypeError):
        return detail
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
    return detail
