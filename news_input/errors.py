"""Exception hierarchy for the ingestion pipeline.

Components raise these; ``IngestionProcessor`` converts them into failure
envelopes so nothing escapes a single request.
"""

from typing import Optional


class IngestionError(Exception):
    """Base class for every expected ingestion failure."""

    default_message = "Processing failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(IngestionError):
    """Input is missing or has the wrong shape."""

    default_message = "Invalid input"


class NetworkError(IngestionError):
    """Remote host could not be reached after all retries."""

    default_message = "URL unreachable"


class ContentQualityError(IngestionError):
    """Extracted text is shorter than the source-specific minimum."""

    default_message = "Content too short"

    def __init__(self, message: Optional[str] = None, minimum: int = 0):
        super().__init__(message)
        self.minimum = minimum


class FormatError(IngestionError):
    """Binary signature or hinted type is not supported."""

    default_message = "Unsupported file format"


class DocumentDecodeError(FormatError):
    """A PDF or DOCX document could not be decoded to usable text."""

    default_message = "Document decoding failed"
