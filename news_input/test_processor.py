import io

import pytest
from docx import Document

from news_input import document_decoder
from news_input.errors import NetworkError
from news_input.models import IngestionRequest, IngestionResult
from news_input.observability import IngestionMetrics
from news_input.processor import IngestionProcessor


class StubFetcher:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.urls = []

    def fetch(self, url):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.text


def make_docx(*paragraphs):
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    out = io.BytesIO()
    document.save(out)
    return out.getvalue()


def assert_failure(result):
    assert result.success is False
    assert result.text == ""
    assert result.language is None
    assert result.error


def test_text_path_returns_english_envelope():
    result = IngestionProcessor(fetcher=StubFetcher()).process("Hello world, this is a test.", "text")
    assert result.to_dict() == {
        "success": True,
        "text": "Hello world, this is a test.",
        "sourceType": "text",
        "language": "en",
        "error": None,
    }


def test_cjk_text_is_tagged_chinese():
    result = IngestionProcessor(fetcher=StubFetcher()).process("中" * 40)
    assert result.success
    assert result.language == "zh"
    assert result.source_type == "text"


def test_url_is_auto_detected_and_fetched():
    fetcher = StubFetcher(text="  El gobierno anunció que la economía del país crece en este año.  ")
    result = IngestionProcessor(fetcher=fetcher).process("https://noticias.example.com/economia")
    assert fetcher.urls == ["https://noticias.example.com/economia"]
    assert result.success
    assert result.source_type == "url"
    assert result.language == "es"
    assert result.text.startswith("El gobierno")


def test_fetch_failure_becomes_envelope():
    fetcher = StubFetcher(error=NetworkError("URL unreachable"))
    result = IngestionProcessor(fetcher=fetcher).process("https://down.example.com", "url")
    assert_failure(result)
    assert result.error == "URL unreachable"
    assert result.source_type == "url"


def test_docx_buffer_is_sniffed_and_decoded():
    buffer = make_docx("Hôm nay thành phố khai trương cây cầu mới.")
    result = IngestionProcessor(fetcher=StubFetcher()).process(buffer)
    assert result.success
    assert result.source_type == "docx"
    assert result.language == "vi"


def test_pdf_buffer_is_sniffed_and_decoded(monkeypatch):
    monkeypatch.setattr(document_decoder, "extract_text",
                        lambda *a, **kw: "FRONT PAGE\nCouncil approves the new county budget.\n1\n")
    result = IngestionProcessor(fetcher=StubFetcher()).process(b"%PDF-1.4 ...")
    assert result.success
    assert result.source_type == "pdf"
    assert result.text == "Council approves the new county budget."


@pytest.mark.parametrize("hint,message", [("pdf", "PDF decoding failed"), ("docx", "DOCX decoding failed")])
def test_empty_documents_fail_with_format_specific_error(hint, message):
    processor = IngestionProcessor(fetcher=StubFetcher())
    result = processor.process(b"", hint)
    assert_failure(result)
    assert result.error == message
    assert result.source_type == hint


def test_unknown_buffer_fails_with_format_message():
    result = IngestionProcessor(fetcher=StubFetcher()).process(b"\x89PNG\r\n\x1a\n....")
    assert_failure(result)
    assert "format" in result.error.lower()
    assert result.source_type == "unknown"


def test_empty_input():
    result = IngestionProcessor(fetcher=StubFetcher()).process("")
    assert_failure(result)
    assert result.error == "No input provided"
    assert IngestionProcessor(fetcher=StubFetcher()).process(None).error == "No input provided"


def test_unsupported_hint_is_reported():
    result = IngestionProcessor(fetcher=StubFetcher()).process("some text here", "xlsx")
    assert_failure(result)
    assert result.error == "Unsupported file format"


def test_payload_shape_must_match_hint():
    processor = IngestionProcessor(fetcher=StubFetcher())
    assert_failure(processor.process("not bytes at all", "pdf"))
    assert_failure(processor.process(b"raw bytes", "url"))
    assert processor.process(b"raw bytes here", "text").error == "Invalid text input"


def test_short_text_is_rejected():
    result = IngestionProcessor(fetcher=StubFetcher()).process("<b>hi</b>", "text")
    assert_failure(result)
    assert result.error == "Text content too short after cleaning"


def test_unexpected_errors_are_contained():
    fetcher = StubFetcher(error=RuntimeError())
    result = IngestionProcessor(fetcher=fetcher).process("https://example.com/x")
    assert_failure(result)
    assert result.error == "Processing failed"


def test_process_request():
    processor = IngestionProcessor(fetcher=StubFetcher())
    result = processor.process_request(IngestionRequest.from_text("A plain block of pasted article text."))
    assert result.success
    assert result.source_type == "text"


def test_metrics_are_recorded():
    metrics = IngestionMetrics()
    processor = IngestionProcessor(fetcher=StubFetcher(), metrics=metrics)
    processor.process("Hello world, this is a test.")
    processor.process(b"????")
    registry = metrics.registry
    assert registry.get_sample_value(
        "ingestion_requests_total", {"source_type": "text", "outcome": "success"}) == 1.0
    assert registry.get_sample_value(
        "ingestion_requests_total", {"source_type": "unknown", "outcome": "failure"}) == 1.0


def test_request_requires_exactly_one_payload():
    from news_input.errors import ValidationError

    with pytest.raises(ValidationError):
        IngestionRequest()
    with pytest.raises(ValidationError):
        IngestionRequest(url="https://example.com", text="also text")
    assert IngestionRequest.from_buffer(b"%PDF").payload == b"%PDF"


def test_result_envelope_invariant():
    with pytest.raises(ValueError):
        IngestionResult(success=True, text="", source_type="text", language="en")
    with pytest.raises(ValueError):
        IngestionResult(success=False, text="leftover", source_type="text", error="boom")
    assert IngestionResult.failure("").error == "Processing failed"
