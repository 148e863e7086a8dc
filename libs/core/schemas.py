from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Type

from pydantic import BaseModel

from . import models

_STRING_LIST: Dict[str, Any] = {"type": "array", "items": {"type": "string"}}

EVALUATION_RESULT_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "EvaluationResult",
    "type": "object",
    "required": [
        "score",
        "summary",
        "strengths",
        "weaknesses",
        "missing_keywords",
        "rewrite_suggestions",
    ],
    "properties": {
        "score": {"type": "integer", "minimum": 0, "maximum": 100},
        "summary": {"type": "string"},
        "strengths": _STRING_LIST,
        "weaknesses": _STRING_LIST,
        "missing_keywords": _STRING_LIST,
        "rewrite_suggestions": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["issue", "original", "improved"],
                "properties": {
                    "issue": {"type": "string"},
                    "original": {"type": "string"},
                    "improved": {"type": "string"},
                },
            },
        },
    },
}

SCHEMA_TARGETS: Dict[str, Type[BaseModel]] = {
    "EvaluationRequest": models.EvaluationRequest,
    "PromptPayload": models.PromptPayload,
    "AnalyzeResponse": models.AnalyzeResponse,
    "DownloadRequest": models.DownloadRequest,
    "ErrorResponse": models.ErrorResponse,
}


def export_schemas(target_dir: Path) -> None:
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / "EvaluationResult.json").write_text(
        json.dumps(EVALUATION_RESULT_SCHEMA, indent=2)
    )
    for name, model in SCHEMA_TARGETS.items():
        schema_path = target_dir / f"{name}.json"
        schema_path.write_text(json.dumps(model.model_json_schema(by_alias=True), indent=2))
