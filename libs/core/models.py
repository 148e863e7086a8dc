from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_DOWNLOAD_FILENAME = "Improved_Resume"


@dataclass
class UploadedDocument:
    content: bytes
    media_type: Optional[str]
    filename: str = ""


class ExtractionResult(BaseModel):
    plain_text: str


class EvaluationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    occupation: str
    resume_text: str


class ChatMessage(BaseModel):
    role: str
    content: str


class PromptPayload(BaseModel):
    messages: List[ChatMessage]

    def as_dicts(self) -> List[dict]:
        return [message.model_dump() for message in self.messages]


class RewriteSuggestion(BaseModel):
    issue: str
    original: str
    improved: str


class EvaluationResult(BaseModel):
    score: int = Field(..., ge=0, le=100)
    summary: str
    strengths: List[str]
    weaknesses: List[str]
    missing_keywords: List[str]
    rewrite_suggestions: List[RewriteSuggestion]


class Analysis(BaseModel):
    summary: str
    strengths: List[str]
    weaknesses: List[str]
    missing_keywords: List[str]
    rewrite_suggestions: List[RewriteSuggestion]


class AnalyzeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    score: int
    analysis: Analysis
    updated_resume_text: str = Field(..., alias="updatedResumeText")
    suggested_filename: str = Field(DEFAULT_DOWNLOAD_FILENAME, alias="suggestedFilename")

    @classmethod
    def from_evaluation(cls, result: EvaluationResult, resume_text: str) -> "AnalyzeResponse":
        return cls(
            score=result.score,
            analysis=Analysis(
                summary=result.summary,
                strengths=result.strengths,
                weaknesses=result.weaknesses,
                missing_keywords=result.missing_keywords,
                rewrite_suggestions=result.rewrite_suggestions,
            ),
            updated_resume_text=resume_text,
            suggested_filename=DEFAULT_DOWNLOAD_FILENAME,
        )


class DownloadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_text: Optional[str] = Field(None, alias="updatedText")
    filename: Optional[str] = None


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
