from __future__ import annotations

import asyncio
import json
import time
from typing import Any

from jsonschema import Draft202012Validator
from pydantic import ValidationError

from libs.core import llm_provider, logging as core_logging
from libs.core.models import EvaluationResult, PromptPayload
from libs.core.schemas import EVALUATION_RESULT_SCHEMA

from .errors import MalformedResponse, UpstreamError

_VALIDATOR = Draft202012Validator(EVALUATION_RESULT_SCHEMA)
_MAX_REPORTED_ERRORS = 5


def parse_evaluation(content: str) -> EvaluationResult:
    """Parse the raw model output into an EvaluationResult.

    The content must be exactly one JSON object. Prose around the object is
    rejected rather than stripped, so the same output always yields the same
    outcome.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedResponse(f"invalid_json:{exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponse("invalid_json:expected an object")
    errors = sorted(
        _VALIDATOR.iter_errors(data), key=lambda err: [str(part) for part in err.path]
    )
    if errors:
        messages = "; ".join(
            f"{'/'.join(map(str, err.path)) or '<root>'}: {err.message}"
            for err in errors[:_MAX_REPORTED_ERRORS]
        )
        raise MalformedResponse(f"invalid_schema:{messages}")
    try:
        return EvaluationResult.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse(f"invalid_schema:{exc}") from exc


class ScoringClient:
    def __init__(self, provider: llm_provider.LLMProvider, logger: Any | None = None) -> None:
        self.provider = provider
        self.logger = logger or core_logging.get_logger("evaluator")

    async def score(self, payload: PromptPayload) -> EvaluationResult:
        messages = payload.as_dicts()
        model = getattr(self.provider, "model", "")
        self.logger.info(
            "scoring_request",
            model=model,
            prompt_len=sum(len(message["content"]) for message in messages),
        )
        start = time.perf_counter()
        try:
            response = await asyncio.to_thread(
                self.provider.generate, messages, llm_provider.JSON_OBJECT_FORMAT
            )
        except llm_provider.LLMProviderError as exc:
            self.logger.error(
                "scoring_upstream_error", error=exc.message, upstream_status=exc.status_code
            )
            raise UpstreamError(exc.message, upstream_status=exc.status_code) from exc
        duration_ms = int((time.perf_counter() - start) * 1000)
        core_logging.log_event(
            self.logger,
            "scoring_response",
            {"duration_ms": duration_ms, "response_len": len(response.content or "")},
        )
        try:
            result = parse_evaluation(response.content)
        except MalformedResponse as exc:
            self.logger.error("scoring_parse_error", error=exc.detail)
            raise
        self.logger.info("scoring_success", score=result.score)
        return result
