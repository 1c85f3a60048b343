"""
Text cleanup shared by every ingestion path.

This module handles:
- Sanitizing raw pasted text (tags, emoji, control characters, smart quotes)
- Whitespace collapsing for text pulled out of HTML/PDF/DOCX
- The final newline normalization applied to every successful result
"""

import logging
import re

from .errors import ContentQualityError, ValidationError

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 5

HTML_TAG_RE = re.compile(r'<[^>]*>')
EMOJI_RE = re.compile(
    '['
    '\U0001F600-\U0001F64F'  # emoticons
    '\U0001F300-\U0001F5FF'  # symbols & pictographs
    '\U0001F680-\U0001F6FF'  # transport & map
    '\U0001F1E0-\U0001F1FF'  # flags
    '\u2600-\u26FF'          # misc symbols
    '\u2700-\u27BF'          # dingbats
    ']'
)
# C0/C1 controls minus \t \n \r, which collapse as whitespace instead
CONTROL_CHARS_RE = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]')
WHITESPACE_RE = re.compile(r'\s+')
EXCESS_NEWLINES_RE = re.compile(r'\n{3,}')

SMART_QUOTES = str.maketrans({
    '\u201c': '"',
    '\u201d': '"',
    '\u201e': '"',
    '\u201f': '"',
    '\u2033': '"',
    '\u2018': "'",
    '\u2019': "'",
    '\u201a': "'",
    '\u201b': "'",
    '\u2032': "'",
})


def sanitize(text) -> str:
    """
    Clean user-pasted text.

    Args:
        text: Raw text input

    Returns:
        Sanitized single-line text

    Raises:
        ValidationError: If ``text`` is not a non-empty string
        ContentQualityError: If fewer than 5 characters survive cleaning
    """
    if not text or not isinstance(text, str):
        raise ValidationError("Invalid text input")

    cleaned = HTML_TAG_RE.sub('', text)
    cleaned = EMOJI_RE.sub('', cleaned)
    cleaned = CONTROL_CHARS_RE.sub('', cleaned)
    cleaned = cleaned.translate(SMART_QUOTES)
    cleaned = WHITESPACE_RE.sub(' ', cleaned).strip()

    if len(cleaned) < MIN_TEXT_LENGTH:
        logger.debug(f"Sanitized text too short ({len(cleaned)} chars)")
        raise ContentQualityError("Text content too short after cleaning", minimum=MIN_TEXT_LENGTH)

    return cleaned


def clean_extracted_text(text: str) -> str:
    """Collapse every whitespace run in extracted text to a single space."""
    if not text:
        return ''
    return WHITESPACE_RE.sub(' ', text).strip()


def collapse_newlines(text: str) -> str:
    return EXCESS_NEWLINES_RE.sub('\n\n', text)


def normalize_whitespace(text: str) -> str:
    """Trim each line, keep at most one blank line between blocks, trim overall."""
    if not text:
        return ''
    lines = [line.strip() for line in text.strip().split('\n')]
    return collapse_newlines('\n'.join(lines)).strip()
