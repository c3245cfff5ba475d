"""Text-object ranges (``iw``, ``a(``, ``i"``, ...).

Results are charwise ``MotionRange`` values with an exclusive end so an
empty inner object (``i(`` on ``()``) is representable.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Optional

from vimcore.actions.models import ObjectAction
from vimcore.buffer.document import TextDocument

from .motions import MotionRange
from .words import Word, WordType, big_word_at, word_at

ObjectHandler = Callable[[TextDocument, ObjectAction, int], Optional[MotionRange]]

OBJECT_KEYS = frozenset("wWsp[]()<>t{}\"'`bB")


def _word(
    doc: TextDocument,
    action: ObjectAction,
    index: int,
    *,
    finder: Callable[[str, int], Optional[Word]],
) -> Optional[MotionRange]:
    text = doc.text
    word = finder(text, min(index, len(text) - 1))
    if word is None:
        return None
    end = word.end + 1
    if action.include_delimiters and word.type is not WordType.WHITESPACE:
        while end < len(text) and text[end] in " \t":
            end += 1
    return MotionRange(word.start, end)


def _quote(
    doc: TextDocument, action: ObjectAction, index: int, *, quote: str
) -> Optional[MotionRange]:
    line = doc.line_at(index)
    text = line.text
    column = index - line.start
    if column < len(text) and text[column] == quote:
        if text.count(quote, 0, column) % 2 == 0:
            opening, closing = column, text.find(quote, column + 1)
        else:
            opening, closing = text.rfind(quote, 0, column), column
    else:
        opening, closing = text.rfind(quote, 0, column), text.find(quote, column)
    if opening < 0 or closing < 0:
        return None
    return _delimited(line.start + opening, line.start + closing, action)


def _bracket(
    doc: TextDocument, action: ObjectAction, index: int, *, opening: str, closing: str
) -> Optional[MotionRange]:
    text = doc.text
    if not text:
        return None
    left = _enclosing_open(text, min(index, len(text) - 1), opening, closing)
    if left is None:
        return None
    right = _matching_close(text, left, opening, closing)
    if right is None:
        return None
    return _delimited(left, right, action)


def _delimited(left: int, right: int, action: ObjectAction) -> MotionRange:
    if action.include_delimiters:
        return MotionRange(left, right + 1)
    return MotionRange(left + 1, right)


def _enclosing_open(text: str, index: int, opening: str, closing: str) -> Optional[int]:
    depth = 0
    for cursor in range(index, -1, -1):
        char = text[cursor]
        if char == closing and cursor != index:
            depth += 1
        elif char == opening:
            if depth == 0:
                return cursor
            depth -= 1
    return None


def _matching_close(text: str, left: int, opening: str, closing: str) -> Optional[int]:
    depth = 0
    for cursor in range(left + 1, len(text)):
        char = text[cursor]
        if char == opening:
            depth += 1
        elif char == closing:
            if depth == 0:
                return cursor
            depth -= 1
    return None


_parens = partial(_bracket, opening="(", closing=")")
_braces = partial(_bracket, opening="{", closing="}")
_squares = partial(_bracket, opening="[", closing="]")
_angles = partial(_bracket, opening="<", closing=">")

_OBJECT_HANDLERS: Dict[str, ObjectHandler] = {
    "w": partial(_word, finder=word_at),
    "W": partial(_word, finder=big_word_at),
    '"': partial(_quote, quote='"'),
    "'": partial(_quote, quote="'"),
    "`": partial(_quote, quote="`"),
    "(": _parens,
    ")": _parens,
    "b": _parens,
    "{": _braces,
    "}": _braces,
    "B": _braces,
    "[": _squares,
    "]": _squares,
    "<": _angles,
    ">": _angles,
}


def calculate_object(
    document: TextDocument, action: ObjectAction, index: int
) -> Optional[MotionRange]:
    """Range covered by ``action`` around ``index``; ``None`` when absent.

    Sentence, paragraph and tag objects are recognised by the parser but
    have no range here.
    """

    handler = _OBJECT_HANDLERS.get(action.object)
    if handler is None:
        return None
    return handler(document, action, index)


__all__ = ["OBJECT_KEYS", "calculate_object"]
