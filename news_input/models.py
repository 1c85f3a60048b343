"""Request and result types for the ingestion pipeline."""

from dataclasses import dataclass
from typing import Dict, Optional, Union

from .errors import ValidationError
from .resolver import SourceKind, parse_hint


@dataclass(frozen=True)
class IngestionRequest:
    """Exactly one of ``url``, ``buffer`` or ``text`` plus an optional hint."""
    url: Optional[str] = None
    buffer: Optional[bytes] = None
    text: Optional[str] = None
    hint: Optional[str] = None

    def __post_init__(self):
        provided = [v for v in (self.url, self.buffer, self.text) if v is not None]
        if len(provided) != 1:
            raise ValidationError("Exactly one of url, buffer or text is required")
        parse_hint(self.hint)

    @classmethod
    def from_url(cls, url: str) -> "IngestionRequest":
        return cls(url=url, hint=SourceKind.URL.value)

    @classmethod
    def from_buffer(cls, buffer: bytes, hint: Optional[str] = None) -> "IngestionRequest":
        return cls(buffer=buffer, hint=hint)

    @classmethod
    def from_text(cls, text: str) -> "IngestionRequest":
        return cls(text=text, hint=SourceKind.TEXT.value)

    @property
    def payload(self) -> Union[str, bytes]:
        if self.url is not None:
            return self.url
        if self.buffer is not None:
            return self.buffer
        return self.text


@dataclass(frozen=True)
class IngestionResult:
    """Canonical result envelope returned for every ingestion request."""
    success: bool
    text: str
    source_type: str
    language: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self):
        if self.success:
            if not self.text or self.language is None or self.error is not None:
                raise ValueError("Successful result needs text and language and no error")
        elif self.text or self.language is not None or not self.error:
            raise ValueError("Failed result needs an error and no text or language")

    @classmethod
    def ok(cls, text: str, source_type: SourceKind, language: str) -> "IngestionResult":
        return cls(success=True, text=text, source_type=SourceKind(source_type).value,
                   language=language, error=None)

    @classmethod
    def failure(cls, error: str, source_type: Union[SourceKind, str, None] = None) -> "IngestionResult":
        if isinstance(source_type, SourceKind):
            source_type = source_type.value
        return cls(success=False, text='', source_type=source_type or SourceKind.UNKNOWN.value,
                   language=None, error=error or "Processing failed")

    def to_dict(self) -> Dict:
        return {
            'success': self.success,
            'text': self.text,
            'sourceType': self.source_type,
            'language': self.language,
            'error': self.error,
        }
