from __future__ import annotations

from typing import Any, BinaryIO, Optional, Tuple

from libs.core import logging as core_logging, prompts
from libs.core.models import (
    AnalyzeResponse,
    DownloadRequest,
    EvaluationRequest,
    ExtractionResult,
    UploadedDocument,
)

from .config import EvaluatorConfig
from .errors import NoFileUploaded, NoTextProvided
from .export import attachment_filename, export_docx
from .extraction import extract_text
from .scoring import ScoringClient
from .uploads import stored_upload


class EvaluatorService:
    def __init__(
        self,
        config: EvaluatorConfig,
        scoring_client: ScoringClient,
        logger: Any | None = None,
    ) -> None:
        self.config = config
        self.scoring_client = scoring_client
        self.logger = logger or core_logging.get_logger("evaluator")

    def extract_upload(
        self, stream: BinaryIO, media_type: Optional[str], filename: str = ""
    ) -> ExtractionResult:
        with stored_upload(stream, self.config.upload_dir) as path:
            document = UploadedDocument(
                content=path.read_bytes(), media_type=media_type, filename=filename
            )
            self.logger.info(
                "upload_stored",
                filename=document.filename,
                media_type=document.media_type,
                size_bytes=len(document.content),
            )
            extraction = extract_text(document.content, document.media_type)
        self.logger.info("extraction_complete", text_len=len(extraction.plain_text))
        return extraction

    async def analyze(
        self,
        stream: Optional[BinaryIO],
        media_type: Optional[str],
        occupation: str,
        filename: str = "",
    ) -> AnalyzeResponse:
        if stream is None:
            raise NoFileUploaded()
        self.logger.info("analyze_request", filename=filename, occupation=occupation)
        extraction = self.extract_upload(stream, media_type, filename)
        request = EvaluationRequest(occupation=occupation, resume_text=extraction.plain_text)
        result = await self.scoring_client.score(prompts.evaluation_prompt(request))
        return AnalyzeResponse.from_evaluation(result, extraction.plain_text)

    def download(self, request: DownloadRequest) -> Tuple[bytes, str]:
        if not request.updated_text:
            raise NoTextProvided()
        filename = attachment_filename(request.filename)
        content = export_docx(request.updated_text, filename)
        self.logger.info("download_ready", filename=filename, size_bytes=len(content))
        return content, filename
