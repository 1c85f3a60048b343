"""
FastAPI surface for news input ingestion.

This module exposes the ingestion processor over HTTP:
- URL, file upload, raw text and auto-detect endpoints
- Success envelopes map to 200, failure envelopes to 400
- Prometheus metrics and a health probe
"""

import base64
import binascii
import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel

from .config import Settings
from .models import IngestionResult
from .observability import IngestionMetrics, setup_logging
from .processor import IngestionProcessor
from .resolver import SourceKind

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = 'application/pdf'
DOCX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.wordprocessingml.document'
ALLOWED_UPLOAD_TYPES = {
    PDF_CONTENT_TYPE: SourceKind.PDF,
    DOCX_CONTENT_TYPE: SourceKind.DOCX,
}


# Pydantic models
class URLInput(BaseModel):
    """Request body for URL ingestion."""
    url: Optional[str] = None


class TextInput(BaseModel):
    """Request body for raw text ingestion."""
    text: Optional[str] = None


class AutoInput(BaseModel):
    """Request body for auto-detected ingestion."""
    input: Optional[str] = None
    inputType: Optional[str] = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'success': False, 'error': message})


def _envelope(result: IngestionResult) -> JSONResponse:
    return JSONResponse(status_code=200 if result.success else 400, content=result.to_dict())


def _internal_error(source_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=IngestionResult.failure("Internal server error", source_type).to_dict(),
    )


def decode_data_uri(value: str) -> bytes:
    """Decode the base64 payload of a ``data:`` URI."""
    header, _, data = value.partition(',')
    if not data:
        raise ValueError("Data URI has no payload")
    if ';base64' in header:
        return base64.b64decode(data, validate=True)
    return data.encode('utf-8')


def create_router(processor: IngestionProcessor, settings: Settings) -> APIRouter:
    router = APIRouter(prefix="/api/news-input")

    @router.post("/url")
    async def process_url(body: URLInput):
        if not body.url:
            return _error(400, "URL is required")
        try:
            result = await run_in_threadpool(processor.process, body.url, SourceKind.URL.value)
        except Exception:
            logger.exception("URL ingestion crashed")
            return _internal_error(SourceKind.URL.value)
        return _envelope(result)

    @router.post("/file")
    async def process_file(file: Optional[UploadFile] = File(None)):
        if file is None:
            return _error(400, "No file uploaded")
        kind = ALLOWED_UPLOAD_TYPES.get(file.content_type)
        if kind is None:
            return _error(400, "Unsupported file type. Only PDF and DOCX files are allowed.")

        limit = settings.max_upload_bytes
        if file.size is not None and file.size > limit:
            return _error(413, "File too large")
        # never buffer more than one byte past the limit
        buffer = await file.read(limit + 1)
        if len(buffer) > limit:
            return _error(413, "File too large")
        try:
            result = await run_in_threadpool(processor.process, buffer, kind.value)
        except Exception:
            logger.exception(f"File ingestion crashed for {file.filename}")
            return _internal_error("file")
        return _envelope(result)

    @router.post("/text")
    async def process_text(body: TextInput):
        if not body.text:
            return _error(400, "Text is required")
        try:
            result = await run_in_threadpool(processor.process, body.text, SourceKind.TEXT.value)
        except Exception:
            logger.exception("Text ingestion crashed")
            return _internal_error(SourceKind.TEXT.value)
        return _envelope(result)

    @router.post("/auto")
    async def process_auto(body: AutoInput):
        if not body.input:
            return _error(400, "Input is required")

        source = body.input
        if source.startswith('data:'):
            try:
                source = decode_data_uri(source)
            except (ValueError, binascii.Error) as e:
                logger.warning(f"Rejected malformed data URI: {str(e)}")
                return _error(400, "Invalid data URI")
        try:
            result = await run_in_threadpool(processor.process, source, body.inputType)
        except Exception:
            logger.exception("Auto ingestion crashed")
            return _internal_error("auto")
        return _envelope(result)

    return router


def create_app(processor: Optional[IngestionProcessor] = None,
               settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    if processor is None:
        metrics = IngestionMetrics()
        processor = IngestionProcessor(settings.fetch_config(), metrics=metrics)
    else:
        metrics = processor.metrics

    app = FastAPI(
        title="News Input API",
        description="Turns URLs, documents and pasted text into clean article text",
        version="0.1.0",
    )
    app.include_router(create_router(processor, settings))

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.get("/metrics")
    async def metrics_endpoint():
        if metrics is None:
            return Response(status_code=204)
        return Response(generate_latest(metrics.registry), media_type=CONTENT_TYPE_LATEST)

    return app


def main():
    """Run the API with uvicorn."""
    import uvicorn

    settings = Settings()
    setup_logging(settings.log_level, settings.log_format)
    uvicorn.run(create_app(settings=settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
