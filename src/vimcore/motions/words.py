"""Character classes and word/WORD boundary detection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

_WHITESPACE = re.compile(r"\s")
_WORD_CHAR = re.compile(r"\w")


class WordType(str, Enum):
    TEXT = "text"
    SYMBOL = "symbol"
    WHITESPACE = "whitespace"


@dataclass(frozen=True, slots=True)
class Word:
    """Maximal run of one character class; ``start``/``end`` are inclusive."""

    start: int
    end: int
    type: WordType


def classify(char: str) -> WordType:
    if _WHITESPACE.match(char):
        return WordType.WHITESPACE
    if _WORD_CHAR.match(char):
        return WordType.TEXT
    return WordType.SYMBOL


def classify_big(char: str) -> WordType:
    if _WHITESPACE.match(char):
        return WordType.WHITESPACE
    return WordType.TEXT


def _run_at(text: str, index: int, classifier: Callable[[str], WordType]) -> Optional[Word]:
    if not 0 <= index < len(text):
        return None
    kind = classifier(text[index])
    start = index
    while start > 0 and classifier(text[start - 1]) is kind:
        start -= 1
    end = index
    while end + 1 < len(text) and classifier(text[end + 1]) is kind:
        end += 1
    return Word(start=start, end=end, type=kind)


def word_at(text: str, index: int) -> Optional[Word]:
    """Small word (text, symbol or whitespace run) containing ``index``."""

    return _run_at(text, index, classify)


def big_word_at(text: str, index: int) -> Optional[Word]:
    """WORD (non-whitespace or whitespace run) containing ``index``."""

    return _run_at(text, index, classify_big)


__all__ = ["Word", "WordType", "big_word_at", "classify", "classify_big", "word_at"]
