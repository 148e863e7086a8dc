from .config import EvaluatorConfig, create_provider
from .errors import (
    EvaluatorError,
    ExportFailed,
    ExtractionFailed,
    MalformedResponse,
    NoFileUploaded,
    NoTextProvided,
    UnsupportedFormat,
    UpstreamError,
)
from .scoring import ScoringClient, parse_evaluation
from .service import EvaluatorService

__all__ = [
    "EvaluatorConfig",
    "EvaluatorError",
    "EvaluatorService",
    "ExportFailed",
    "ExtractionFailed",
    "MalformedResponse",
    "NoFileUploaded",
    "NoTextProvided",
    "ScoringClient",
    "UnsupportedFormat",
    "UpstreamError",
    "create_provider",
    "parse_evaluation",
]
