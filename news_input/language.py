"""
Heuristic language tagging.

Detection is a fixed, ordered list of (predicate, tag) rules evaluated against
the first 1000 characters of sanitized text. The first rule that matches wins.
Chinese is checked before Japanese because kanji share the CJK ideograph range
with Chinese and mixed text would otherwise be misread.
"""

import re
from typing import Callable, Tuple

DEFAULT_LANGUAGE = 'en'
SUPPORTED_LANGUAGES = ('en', 'zh', 'jp', 'vi', 'es')

MIN_DETECTION_LENGTH = 10
SAMPLE_SIZE = 1000
SPANISH_WORD_THRESHOLD = 2

CJK_IDEOGRAPH_RE = re.compile('[\u4e00-\u9fff]')
KANA_RE = re.compile('[\u3040-\u309f\u30a0-\u30ff]')

# Letters specific to Vietnamese; shared Latin accents (á, é, ñ...) are left
# out so Spanish text does not trip this rule.
VIETNAMESE_LETTERS = (
    'ăắằẳẵặâấầẩẫậạảđêếềểễệẹẻẽỉịĩọỏôốồổỗộơớờởỡợụủũưứừửữựỳỵỷỹ'
)
VIETNAMESE_RE = re.compile(
    '[' + VIETNAMESE_LETTERS + VIETNAMESE_LETTERS.upper() + ']'
)

SPANISH_STOP_WORDS = frozenset([
    'el', 'la', 'los', 'las', 'de', 'del', 'que', 'y', 'en', 'un', 'una',
    'es', 'se', 'lo', 'le', 'su', 'sus', 'por', 'con', 'para', 'está',
    'están', 'como', 'pero', 'sin', 'sobre', 'este', 'esta', 'ya', 'cuando',
    'todo', 'ser', 'también', 'fue', 'había', 'parte', 'tiene', 'mismo',
    'hasta', 'desde', 'ni', 'sí', 'día', 'año', 'años', 'tiempo', 'verdad',
    'bien', 'hacer', 'vida', 'mundo', 'antes', 'después', 'cosas', 'donde',
    'entonces', 'ahora', 'ella', 'ellas', 'hecho', 'gente', 'nada', 'nombre',
    'casa', 'madre', 'padre', 'niño', 'conocer', 'dar',
])

WORD_RE = re.compile(r'\w+')


def has_cjk_ideographs(sample: str) -> bool:
    return CJK_IDEOGRAPH_RE.search(sample) is not None


def has_kana(sample: str) -> bool:
    return KANA_RE.search(sample) is not None


def has_vietnamese_letters(sample: str) -> bool:
    return VIETNAMESE_RE.search(sample) is not None


def spanish_word_score(sample: str) -> int:
    """Count distinct Spanish stop words present in ``sample``."""
    words = set(WORD_RE.findall(sample.lower()))
    return len(words & SPANISH_STOP_WORDS)


def looks_spanish(sample: str) -> bool:
    return spanish_word_score(sample) > SPANISH_WORD_THRESHOLD


LANGUAGE_RULES: Tuple[Tuple[Callable[[str], bool], str], ...] = (
    (has_cjk_ideographs, 'zh'),
    (has_kana, 'jp'),
    (has_vietnamese_letters, 'vi'),
    (looks_spanish, 'es'),
)


def detect_language(text: str, rules=LANGUAGE_RULES) -> str:
    """
    Return a language tag for ``text``.

    Args:
        text: Sanitized text
        rules: Ordered (predicate, tag) pairs; the first match wins

    Returns:
        One of ``SUPPORTED_LANGUAGES``
    """
    if not text or len(text) < MIN_DETECTION_LENGTH:
        return DEFAULT_LANGUAGE

    sample = text[:SAMPLE_SIZE]
    for predicate, tag in rules:
        if predicate(sample):
            return tag
    return DEFAULT_LANGUAGE

