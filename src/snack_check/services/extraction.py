"""Ingredient extraction from recognized label text."""

import re
from dataclasses import dataclass

_SPAN_PATTERNS = (
    re.compile(r"\bcontains?\b\s*:?\s*([^.]+)", re.IGNORECASE),
    re.compile(r"\bingredients?\b\s*:?\s*([^.]+)", re.IGNORECASE),
    re.compile(r"\bmade\s+with\b\s*:?\s*([^.]+)", re.IGNORECASE),
)
_SENTENCE_SPLIT = re.compile(r"[.!?]")
_PARENTHETICAL = re.compile(r"\(([^)]*)\)")
_TOKEN_SPLIT = re.compile(r"[,;]")
_BRACKETS = re.compile(r"[()\[\]{}]")
_WHITESPACE = re.compile(r"\s+")
_LEADING_NON_LETTERS = re.compile(r"^[^a-zA-Z]+")
_TRAILING_NON_LETTERS = re.compile(r"[^a-zA-Z]+$")
_NUMERIC = re.compile(r"^\d+$")
_SYMBOLS_ONLY = re.compile(r"^[^\w\s]+$")

_MIN_FALLBACK_SENTENCE_LENGTH = 20
_MIN_TOKEN_LENGTH = 3


@dataclass
class TextIngredientExtractor:
    """Turns noisy label text into an ordered list of ingredient names.

    Sub-ingredients listed inside parentheses are emitted after the primary
    ingredients rather than in label order.
    """

    def extract(self, text: str) -> list[str]:
        """Return cleaned, lowercase ingredient candidates from the text."""
        if not text:
            return []
        span = _locate_span(_WHITESPACE.sub(" ", text).strip())
        if not span:
            return []

        parenthetical: list[str] = []
        for inner in _PARENTHETICAL.findall(span):
            if "," in inner:
                parenthetical.extend(inner.split(","))
        main = _PARENTHETICAL.sub("", span)

        primary = _TOKEN_SPLIT.split(main)
        cleaned = (_clean_token(token) for token in [*primary, *parenthetical])
        return [token for token in cleaned if _is_candidate(token)]


def _locate_span(text: str) -> str:
    """Find the part of the text that holds the ingredient list."""
    for pattern in _SPAN_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1)

    for sentence in _SENTENCE_SPLIT.split(text):
        candidate = sentence.strip()
        if "," in candidate and len(candidate) > _MIN_FALLBACK_SENTENCE_LENGTH:
            return candidate
    return ""


def _clean_token(token: str) -> str:
    cleaned = _BRACKETS.sub("", token)
    cleaned = _WHITESPACE.sub(" ", cleaned)
    cleaned = _LEADING_NON_LETTERS.sub("", cleaned)
    cleaned = _TRAILING_NON_LETTERS.sub("", cleaned)
    return cleaned.strip().lower()


def _is_candidate(token: str) -> bool:
    if len(token) < _MIN_TOKEN_LENGTH:
        return False
    if _NUMERIC.match(token) or _SYMBOLS_ONLY.match(token):
        return False
    return True
