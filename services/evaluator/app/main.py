from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from prometheus_client import Counter, Histogram, make_asgi_app

from libs.core import llm_provider, logging as core_logging
from libs.core.models import AnalyzeResponse, DownloadRequest, ErrorResponse
from services.evaluator.evaluator_core import (
    EvaluatorConfig,
    EvaluatorError,
    EvaluatorService,
    NoTextProvided,
    ScoringClient,
    create_provider,
)
from services.evaluator.evaluator_core.export import DOCX_MEDIA_TYPE

LOGGER = core_logging.get_logger("evaluator")

resume_analyses_total = Counter(
    "resume_analyses_total", "Resume analyses by outcome", ["outcome"]
)
resume_downloads_total = Counter(
    "resume_downloads_total", "Resume downloads by outcome", ["outcome"]
)
analysis_duration_seconds = Histogram(
    "analysis_duration_seconds", "End-to-end duration of resume analyses"
)

DOWNLOAD_PATH = "/api/download"

router = APIRouter()


def get_service(request: Request) -> EvaluatorService:
    return request.app.state.evaluator_service


@router.post(
    "/api/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_endpoint(
    resume: Optional[UploadFile] = File(None),
    occupation: str = Form(""),
    service: EvaluatorService = Depends(get_service),
) -> AnalyzeResponse:
    try:
        with analysis_duration_seconds.time():
            result = await service.analyze(
                resume.file if resume is not None else None,
                resume.content_type if resume is not None else None,
                occupation,
                filename=(resume.filename or "") if resume is not None else "",
            )
    except EvaluatorError as exc:
        resume_analyses_total.labels(outcome=type(exc).__name__).inc()
        raise
    finally:
        if resume is not None:
            await resume.close()
    resume_analyses_total.labels(outcome="success").inc()
    return result


@router.post(DOWNLOAD_PATH)
def download_endpoint(
    payload: DownloadRequest,
    service: EvaluatorService = Depends(get_service),
) -> Response:
    try:
        content, filename = service.download(payload)
    except EvaluatorError as exc:
        resume_downloads_total.labels(outcome=type(exc).__name__).inc()
        raise
    resume_downloads_total.labels(outcome="success").inc()
    return Response(
        content=content,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def _evaluator_error_handler(request: Request, exc: EvaluatorError) -> JSONResponse:
    log = LOGGER.warning if exc.status_code < 500 else LOGGER.error
    log(
        "request_failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=exc.detail,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    if request.url.path == DOWNLOAD_PATH:
        resume_downloads_total.labels(outcome="NoTextProvided").inc()
        return await _evaluator_error_handler(request, NoTextProvided())
    errors = exc.errors()
    detail = str(errors[0].get("msg", "Invalid request")) if errors else "Invalid request"
    return await _evaluator_error_handler(request, EvaluatorError(detail, status_code=400))


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("request_crashed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=ErrorResponse(error=str(exc)).model_dump())


def create_app(
    config: EvaluatorConfig | None = None,
    provider: llm_provider.LLMProvider | None = None,
) -> FastAPI:
    config = config or EvaluatorConfig.from_env()
    core_logging.configure_logging("evaluator", config.log_level)
    provider = provider or create_provider(config)

    app = FastAPI(title="Resume Evaluator Service")
    app.state.evaluator_config = config
    app.state.evaluator_provider = provider
    app.state.evaluator_service = EvaluatorService(
        config, ScoringClient(provider, LOGGER), LOGGER
    )

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_exception_handler(EvaluatorError, _evaluator_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
    app.include_router(router)
    app.mount("/metrics", make_asgi_app())
    if config.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(config.static_dir), html=True), name="static")

    LOGGER.info(
        "evaluator_app_created",
        provider=config.llm_provider,
        model=getattr(provider, "model", ""),
        upload_dir=str(config.upload_dir),
    )
    return app


def run() -> None:
    config = EvaluatorConfig.from_env()
    app = create_app(config)
    LOGGER.info("server_starting", host=config.host, port=config.port)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
