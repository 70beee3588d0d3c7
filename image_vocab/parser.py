"""Extraction and validation of word pairs from a Gemini response."""

import json
from typing import Any, List, Optional

import structlog

from .errors import ParseError
from .models import WordEntry

log = structlog.get_logger()


def extract_text(response: Any) -> Optional[str]:
    """Return the first candidate's first part text, or None if there is none."""
    try:
        text = response["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def parse_words(text: str) -> List[WordEntry]:
    """Decode a JSON array of word objects, dropping incomplete entries."""
    try:
        items = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Recognized text is not valid JSON: {e}") from e

    if not isinstance(items, list):
        raise ParseError(f"Expected a JSON array, got {type(items).__name__}")

    words = []
    for item in items:
        if not isinstance(item, dict):
            raise ParseError(f"Expected word objects, got {type(item).__name__}")
        english = _clean(item.get("englishWord"))
        chinese = _clean(item.get("chineseTranslation"))
        if english and chinese:
            words.append(WordEntry(english_word=english, chinese_translation=chinese))

    dropped = len(items) - len(words)
    if dropped:
        log.info("Dropped incomplete word entries", dropped=dropped, kept=len(words))
    return words


def parse_response(response: Any) -> Optional[List[WordEntry]]:
    """Parse a full response; None means the image had no recognizable words."""
    text = extract_text(response)
    if text is None:
        return None
    return parse_words(text)
