"""Classify an opaque input into a source kind."""

import logging
from enum import Enum
from typing import Optional, Union
from urllib.parse import urlparse

from .errors import FormatError, ValidationError

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b'%PDF'
ZIP_SIGNATURE = b'PK'
URL_SCHEMES = ('http', 'https')

BINARY_TYPES = (bytes, bytearray, memoryview)


class SourceKind(str, Enum):
    URL = 'url'
    PDF = 'pdf'
    DOCX = 'docx'
    TEXT = 'text'
    UNKNOWN = 'unknown'


AUTO_HINT = 'auto'


def parse_hint(hint: Union[str, SourceKind, None]) -> Optional[SourceKind]:
    """Turn a caller-supplied hint into a ``SourceKind``; ``None``/"auto" mean detect."""
    if hint is None or isinstance(hint, SourceKind):
        return hint
    value = str(hint).strip().lower()
    if not value or value == AUTO_HINT:
        return None
    try:
        kind = SourceKind(value)
    except ValueError:
        raise FormatError("Unsupported file format")
    if kind is SourceKind.UNKNOWN:
        raise FormatError("Unsupported file format")
    return kind


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host and no embedded whitespace."""
    if not value or any(ch.isspace() for ch in value.strip()):
        return False
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return parsed.scheme.lower() in URL_SCHEMES and bool(parsed.netloc)


def sniff_binary(buffer) -> SourceKind:
    """Detect PDF or DOCX (ZIP container) from the leading magic bytes."""
    head = bytes(buffer[:4])
    if head.startswith(PDF_SIGNATURE):
        return SourceKind.PDF
    if head.startswith(ZIP_SIGNATURE):
        return SourceKind.DOCX
    return SourceKind.UNKNOWN


def resolve_source(source, hint: Union[str, SourceKind, None] = None) -> SourceKind:
    """
    Determine which decoder should handle ``source``.

    Args:
        source: URL or text string, or a bytes-like buffer
        hint: Optional explicit kind (url, pdf, docx, text, auto)

    Returns:
        The resolved ``SourceKind``; ``UNKNOWN`` for unrecognized binaries
    """
    kind = parse_hint(hint)
    if kind is not None:
        return kind

    if isinstance(source, str):
        kind = SourceKind.URL if is_valid_url(source) else SourceKind.TEXT
    elif isinstance(source, BINARY_TYPES):
        kind = sniff_binary(source)
    else:
        raise ValidationError("Unsupported input type")

    logger.debug(f"Resolved input to {kind.value}")
    return kind
