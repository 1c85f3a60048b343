"""
PDF and DOCX decoding for news input.

Both decoders take the raw uploaded bytes and return plain text after
stripping format artifacts (page numbers and running headers for PDF, bullet
markers for DOCX). They are CPU-bound; callers that need throughput can run
them in a thread or process pool.
"""

import io
import logging
import re

from docx import Document
from pdfminer.high_level import extract_text
from pdfminer.layout import LAParams

from .errors import DocumentDecodeError
from .sanitizer import clean_extracted_text, collapse_newlines

logger = logging.getLogger(__name__)

MIN_DOCUMENT_LENGTH = 10

PAGE_NUMBER_LINE_RE = re.compile(r'^\d+\s*$', re.MULTILINE)
ALL_CAPS_LINE_RE = re.compile(r'^\s*[A-Z][A-Z\s]+\s*$', re.MULTILINE)
BULLET_MARKER_RE = re.compile(r'^\s*-\s*', re.MULTILINE)

PDF_LAPARAMS = LAParams(
    word_margin=0.1,
    char_margin=2.0,
    line_margin=0.5,
)


def strip_pdf_artifacts(text: str) -> str:
    """Drop page-number lines and all-caps header lines, cap blank runs."""
    text = PAGE_NUMBER_LINE_RE.sub('', text)
    text = ALL_CAPS_LINE_RE.sub('', text)
    return collapse_newlines(text)


def strip_docx_artifacts(text: str) -> str:
    """Normalize line endings, cap blank runs and drop leading bullet dashes."""
    text = text.replace('\r\n', '\n')
    text = collapse_newlines(text)
    return BULLET_MARKER_RE.sub('', text)


def decode_pdf(buffer: bytes) -> str:
    """
    Extract text from PDF bytes.

    Args:
        buffer: PDF content as bytes

    Returns:
        Cleaned document text

    Raises:
        DocumentDecodeError: If extraction fails or yields under 10 characters
    """
    try:
        raw = extract_text(io.BytesIO(buffer), laparams=PDF_LAPARAMS)
    except Exception as e:
        logger.warning(f"PDF extraction failed: {str(e)}")
        raise DocumentDecodeError("PDF decoding failed") from e

    text = clean_extracted_text(strip_pdf_artifacts(raw or ''))
    if len(text) < MIN_DOCUMENT_LENGTH:
        logger.warning(f"PDF text too short ({len(text)} chars)")
        raise DocumentDecodeError("PDF decoding failed")

    logger.info(f"Decoded PDF ({len(buffer)} bytes -> {len(text)} chars)")
    return text


def docx_raw_text(buffer: bytes) -> str:
    """Paragraph and table-cell text, one block per paragraph."""
    document = Document(io.BytesIO(buffer))
    blocks = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            for cell in row.cells:
                blocks.append(cell.text)
    return '\n\n'.join(blocks)


def decode_docx(buffer: bytes) -> str:
    """
    Extract text from DOCX bytes.

    Args:
        buffer: DOCX content as bytes

    Returns:
        Cleaned document text

    Raises:
        DocumentDecodeError: If extraction fails or yields under 10 characters
    """
    try:
        raw = docx_raw_text(buffer)
    except Exception as e:
        logger.warning(f"DOCX extraction failed: {str(e)}")
        raise DocumentDecodeError("DOCX decoding failed") from e

    text = clean_extracted_text(strip_docx_artifacts(raw))
    if len(text) < MIN_DOCUMENT_LENGTH:
        logger.warning(f"DOCX text too short ({len(text)} chars)")
        raise DocumentDecodeError("DOCX decoding failed")

    logger.info(f"Decoded DOCX ({len(buffer)} bytes -> {len(text)} chars)")
    return text
