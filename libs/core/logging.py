from __future__ import annotations

import logging
from typing import Any, Dict

import structlog

# Keys that may carry candidate documents; only their length is logged.
REDACTED_TEXT_KEYS = frozenset({"resume_text", "updated_text", "prompt", "response"})


def redact_document_text(_logger: Any, _method: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    for key in REDACTED_TEXT_KEYS & event_dict.keys():
        value = event_dict.pop(key)
        event_dict[f"{key}_len"] = len(value) if isinstance(value, str) else None
    return event_dict


def configure_logging(service_name: str, level: str = "INFO") -> None:
    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO
    logging.basicConfig(level=resolved_level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            redact_document_text,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    logger = structlog.get_logger(service=service_name)
    logger.info("logging_configured", level=logging.getLevelName(resolved_level))


def log_event(logger: structlog.BoundLogger, event_type: str, payload: Dict[str, Any]) -> None:
    logger.info(event_type, **payload)


def get_logger(service_name: str) -> structlog.BoundLogger:
    return structlog.get_logger(service=service_name)
