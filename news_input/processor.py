"""
Unified ingestion processor for news input.

This module coordinates the ingestion process by:
- Resolving the source kind from a hint or from the input itself
- Routing to the matching decoder (URL fetcher, PDF/DOCX decoder, sanitizer)
- Normalizing whitespace and tagging the language of the result
- Converting every failure into a uniform failure envelope
"""

import logging
import time
from typing import Optional

from .config import FetchConfig
from .document_decoder import decode_docx, decode_pdf
from .errors import FormatError, IngestionError, ValidationError
from .fetcher import URLFetcher
from .language import detect_language
from .models import IngestionRequest, IngestionResult
from .observability import IngestionMetrics
from .resolver import BINARY_TYPES, SourceKind, resolve_source
from .sanitizer import normalize_whitespace, sanitize

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Processing failed"


class IngestionProcessor:
    """Main entry point turning any supported input into an ``IngestionResult``."""

    def __init__(self,
                 fetch_config: Optional[FetchConfig] = None,
                 fetcher: Optional[URLFetcher] = None,
                 metrics: Optional[IngestionMetrics] = None):
        """
        Initialize ingestion processor.

        Args:
            fetch_config: HTTP client configuration used to build the default fetcher
            fetcher: Pre-built URL fetcher (overrides ``fetch_config``)
            metrics: Optional Prometheus metrics sink
        """
        self.metrics = metrics
        on_attempt = metrics.inc_fetch_attempt if metrics else None
        self.fetcher = fetcher or URLFetcher(fetch_config, on_attempt=on_attempt)

    def process_request(self, request: IngestionRequest) -> IngestionResult:
        return self.process(request.payload, request.hint)

    def process(self, source, hint: Optional[str] = None) -> IngestionResult:
        """
        Process a URL, document buffer or text.

        Args:
            source: URL/text string or PDF/DOCX bytes
            hint: Optional input type ('url', 'pdf', 'docx', 'text', 'auto')

        Returns:
            A success or failure envelope; never raises
        """
        start = time.perf_counter()
        kind: Optional[SourceKind] = None

        try:
            # empty buffers still go to their decoder for a format-specific error
            if source is None or (isinstance(source, str) and not source):
                raise ValidationError("No input provided")

            kind = resolve_source(source, hint)
            text = self._dispatch(kind, source)
            text = normalize_whitespace(text)
            result = IngestionResult.ok(text, kind, detect_language(text))
            logger.info(
                f"Ingested {kind.value} input ({len(text)} chars, language={result.language})"
            )

        except IngestionError as e:
            logger.warning(f"Ingestion failed for {_label(kind, hint)} input: {e.message}")
            result = IngestionResult.failure(e.message, kind or _hint_label(hint))

        except Exception as e:
            logger.exception(f"Unexpected error while processing {_label(kind, hint)} input")
            result = IngestionResult.failure(str(e) or GENERIC_FAILURE, kind or _hint_label(hint))

        if self.metrics:
            self.metrics.observe_request(result.source_type, result.success,
                                         time.perf_counter() - start)
        return result

    def _dispatch(self, kind: SourceKind, source) -> str:
        if kind is SourceKind.URL:
            return self.fetcher.fetch(_expect_text(source, kind))
        if kind is SourceKind.TEXT:
            return sanitize(source)
        if kind is SourceKind.PDF:
            return decode_pdf(_expect_binary(source, kind))
        if kind is SourceKind.DOCX:
            return decode_docx(_expect_binary(source, kind))
        raise FormatError("Unsupported file format")


def _expect_text(source, kind: SourceKind) -> str:
    if not isinstance(source, str):
        raise ValidationError(f"Expected a string for {kind.value} input")
    return source.strip()


def _expect_binary(source, kind: SourceKind) -> bytes:
    if not isinstance(source, BINARY_TYPES):
        raise ValidationError(f"Expected binary content for {kind.value} input")
    return bytes(source)


def _hint_label(hint) -> Optional[str]:
    if isinstance(hint, SourceKind):
        return hint.value
    if hint and str(hint).lower() in {k.value for k in SourceKind}:
        return str(hint).lower()
    return None


def _label(kind: Optional[SourceKind], hint) -> str:
    return kind.value if kind else (_hint_label(hint) or "unresolved")
