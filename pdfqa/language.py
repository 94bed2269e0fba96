"""
Heuristic detection of the language a question is written in.

Only English and Spanish are recognised. The rules are deliberately simple:
explicit requests ("in English", "en español") win, then Spanish diacritics
and inverted punctuation, then a handful of common English words.
"""

import re
from enum import Enum
from typing import Optional


class Language(str, Enum):
    ENGLISH = "english"
    SPANISH = "spanish"
    UNKNOWN = "unknown"


SPANISH_PHRASES = ("en español", "al español")
ENGLISH_PHRASES = ("in english", "to english")

_SPANISH_CHARS = re.compile(r"[áéíóúñ¿¡]")
_ENGLISH_KEYWORDS = re.compile(r"\b(the|and|what|why|how|explain|summarize|summary)\b")

_DIRECTIVES = {
    Language.ENGLISH: "IMPORTANT: Answer strictly in English.",
    Language.SPANISH: "IMPORTANTE: Responde estrictamente en español.",
}


def detect_language(text: str) -> Language:
    """Guess whether ``text`` is English or Spanish."""
    if not text:
        return Language.UNKNOWN

    q = text.lower()

    if any(phrase in q for phrase in SPANISH_PHRASES):
        return Language.SPANISH
    if any(phrase in q for phrase in ENGLISH_PHRASES):
        return Language.ENGLISH

    if _SPANISH_CHARS.search(q):
        return Language.SPANISH
    if _ENGLISH_KEYWORDS.search(q):
        return Language.ENGLISH

    return Language.UNKNOWN


def language_directive(language: Language) -> Optional[str]:
    """Instruction appended to the question, or None to let the model follow the question."""
    return _DIRECTIVES.get(language)
