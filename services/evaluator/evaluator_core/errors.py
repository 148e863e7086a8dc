from __future__ import annotations

from typing import Any, Dict, Optional

from libs.core.models import ErrorResponse


class EvaluatorError(Exception):
    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def to_payload(self) -> Dict[str, Any]:
        return ErrorResponse(error=self.detail).model_dump()


class NoFileUploaded(EvaluatorError):
    def __init__(self) -> None:
        super().__init__("No file uploaded", status_code=400)


class UnsupportedFormat(EvaluatorError):
    def __init__(self, media_type: Optional[str]) -> None:
        super().__init__("Only PDF/TXT supported for now", status_code=400)
        self.media_type = media_type


class ExtractionFailed(EvaluatorError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=500)


class MalformedResponse(EvaluatorError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=500)


class UpstreamError(EvaluatorError):
    def __init__(self, message: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(message, status_code=500)
        self.upstream_status = upstream_status


class ExportFailed(EvaluatorError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail, status_code=500)


class NoTextProvided(EvaluatorError):
    def __init__(self) -> None:
        super().__init__("No text provided", status_code=400)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.detail}
