from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from libs.core import llm_provider as core_llm


def _parse_optional_float(value: str | None) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_optional_int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_csv(value: str | None) -> List[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class EvaluatorConfig:
    """Process-wide settings, read once at startup."""

    llm_provider: str = "openai"
    openai_api_key: str = ""
    openai_model: str = core_llm.DEFAULT_OPENAI_MODEL
    openai_base_url: str = core_llm.DEFAULT_OPENAI_BASE_URL
    openai_timeout_s: float = 60.0
    host: str = "0.0.0.0"
    port: int = 3000
    upload_dir: Path = Path("uploads")
    static_dir: Path = Path("public")
    cors_origins: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "EvaluatorConfig":
        if load_env_file:
            load_dotenv()
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "openai").strip().lower() or "openai",
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL") or core_llm.DEFAULT_OPENAI_MODEL,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or core_llm.DEFAULT_OPENAI_BASE_URL,
            openai_timeout_s=_parse_optional_float(os.getenv("OPENAI_TIMEOUT_S")) or 60.0,
            host=os.getenv("HOST", "0.0.0.0"),
            port=_parse_optional_int(os.getenv("PORT")) or 3000,
            upload_dir=Path(os.getenv("UPLOAD_DIR", "uploads")),
            static_dir=Path(os.getenv("STATIC_DIR", "public")),
            cors_origins=_parse_csv(os.getenv("CORS_ORIGINS")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def create_provider(config: EvaluatorConfig) -> core_llm.LLMProvider:
    return core_llm.resolve_provider(
        config.llm_provider,
        api_key=config.openai_api_key,
        model=config.openai_model,
        base_url=config.openai_base_url,
        timeout_s=config.openai_timeout_s,
    )
