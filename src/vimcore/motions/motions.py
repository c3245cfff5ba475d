"""Motion calculus: (document, motion, cursor) -> range.

Every handler is a pure function of the document snapshot, the resolved
``MotionAction`` and the cursor index. ``None`` means the motion cannot be
satisfied (search target missing, buffer edge, ...); callers abandon the
command in that case.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import partial
from typing import Callable, Dict, Optional

from vimcore.actions.models import MotionAction
from vimcore.buffer.document import TextDocument
from vimcore.buffer.marks import MarkStore

from .words import Word, WordType, big_word_at, word_at


@dataclass(frozen=True, slots=True)
class MotionRange:
    """Span between two absolute indices; ``end`` may precede ``start``."""

    start: int
    end: int
    inclusive: bool = False
    linewise: bool = False

    def normalized(self) -> "MotionRange":
        if self.end >= self.start:
            return self
        return replace(self, start=self.end, end=self.start)


@dataclass(frozen=True, slots=True)
class LastFind:
    motion: str
    char: str


MotionHandler = Callable[[TextDocument, MotionAction, int], Optional[MotionRange]]
WordFinder = Callable[[str, int], Optional[Word]]

BRACKET_PAIRS = {"(": ")", "[": "]", "{": "}", ")": "(", "]": "[", "}": "{"}
_OPENING = "([{"
_REVERSED_FIND = {"f": "F", "F": "f", "t": "T", "T": "t"}


def _line(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    end = doc.position_at(index).translate(action.count - 1, 0, clamp=True)
    assert end is not None
    return MotionRange(index, end.index, linewise=True)


def _jump(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    if action.target is None:
        return None
    return MotionRange(index, doc.clamp_index(action.target), inclusive=True)


def _left(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    column = doc.position_at(index).column
    return MotionRange(index, index - min(action.count, column))


def _right(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    position = doc.position_at(index)
    length = doc.line(position.line).length
    if position.column + action.count < length:
        return MotionRange(index, index + action.count)
    return MotionRange(index, index + max(0, length - position.column))


def _vertical(
    doc: TextDocument, action: MotionAction, index: int, *, direction: int
) -> Optional[MotionRange]:
    position = doc.position_at(index)
    available = doc.line_count - position.line - 1 if direction > 0 else position.line
    count = min(action.count, available)
    if count <= 0:
        return None
    target = doc.position_from_line(position.line + direction * count, position.column)
    return MotionRange(index, target.index, linewise=True)


def _line_start(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    return MotionRange(index, doc.line_at(index).start)


def _first_non_blank(
    doc: TextDocument, action: MotionAction, index: int
) -> Optional[MotionRange]:
    line = doc.line_at(index)
    return MotionRange(index, line.start + line.first_non_blank)


def _line_end(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    target = doc.position_at(index).translate(action.count - 1, 0, clamp=True)
    assert target is not None
    line = doc.line(target.line)
    if line.is_empty:
        return MotionRange(index, line.start)
    return MotionRange(index, line.end - 1, inclusive=True)


def _word_forward(
    doc: TextDocument, action: MotionAction, index: int, *, finder: WordFinder
) -> Optional[MotionRange]:
    text = doc.text
    end = index
    for _ in range(action.count):
        current = finder(text, end)
        if current is None:
            break
        following = finder(text, current.end + 1)
        if following is None:
            # last word of the buffer: stop just past it
            end = current.end + 1
            break
        end = following.end
        if following.type is WordType.WHITESPACE:
            following = finder(text, following.end + 1)
        if following is None:
            break
        end = following.start
    return MotionRange(index, end)


def _word_end(
    doc: TextDocument, action: MotionAction, index: int, *, finder: WordFinder
) -> Optional[MotionRange]:
    text = doc.text
    end = index
    for _ in range(action.count):
        current = finder(text, end)
        if current is not None and current.end == end:
            current = finder(text, current.end + 1)
        if current is None:
            break
        end = current.end
        if current.type is WordType.WHITESPACE:
            current = finder(text, current.end + 1)
        if current is None:
            break
        end = current.end
    return MotionRange(index, end, inclusive=True)


def _word_backward(
    doc: TextDocument,
    action: MotionAction,
    index: int,
    *,
    finder: WordFinder,
    inclusive: bool,
) -> Optional[MotionRange]:
    text = doc.text
    end = index
    for _ in range(action.count):
        current = finder(text, end)
        if current is None or current.start == end:
            current = finder(text, end - 1)
        if current is None:
            break
        end = current.start
        if current.type is WordType.WHITESPACE:
            current = finder(text, current.start - 1)
        if current is None:
            break
        end = current.start
    return MotionRange(index, end, inclusive=inclusive)


def _find_forward(
    doc: TextDocument, action: MotionAction, index: int, *, until: bool
) -> Optional[MotionRange]:
    text = doc.text
    found = 0
    cursor = index + 1
    while True:
        if cursor >= len(text) or text[cursor] == "\n":
            return None
        if text[cursor] == action.char:
            found += 1
            if found == action.count:
                break
        cursor += 1
    return MotionRange(index, cursor - 1 if until else cursor, inclusive=True)


def _find_backward(
    doc: TextDocument, action: MotionAction, index: int, *, until: bool
) -> Optional[MotionRange]:
    text = doc.text
    found = 0
    cursor = index - 1
    while True:
        if cursor < 0 or text[cursor] == "\n":
            return None
        if text[cursor] == action.char:
            found += 1
            if found == action.count:
                break
        cursor -= 1
    return MotionRange(index, cursor + 1 if until else cursor)


def _to_line(doc: TextDocument, index: int, number: int) -> MotionRange:
    number = max(0, min(number, doc.line_count - 1))
    line = doc.line(number)
    return MotionRange(index, line.start + line.first_non_blank, linewise=True)


def _last_line(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    count = action.count or doc.line_count
    return _to_line(doc, index, min(count, doc.line_count) - 1)


def _first_line(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    count = action.count or 1
    return _to_line(doc, index, min(count, doc.line_count) - 1)


def _relative_line(
    doc: TextDocument, action: MotionAction, index: int, *, direction: int, offset: int = 0
) -> Optional[MotionRange]:
    delta = action.count * direction - offset
    return _to_line(doc, index, doc.position_at(index).line + delta)


def _percent(doc: TextDocument, action: MotionAction, index: int) -> Optional[MotionRange]:
    if action.count:
        return _to_line(doc, index, (action.count * doc.line_count + 99) // 100 - 1)

    text = doc.text
    for cursor in range(index, len(text)):
        char = text[cursor]
        if char in BRACKET_PAIRS:
            partner = match_bracket(text, cursor)
            if partner is None:
                return None
            return MotionRange(index, partner, inclusive=True)
    return None


def match_bracket(text: str, index: int) -> Optional[int]:
    """Index of the bracket balancing ``text[index]``, scanning across lines."""

    bracket = text[index]
    partner = BRACKET_PAIRS[bracket]
    step = 1 if bracket in _OPENING else -1
    depth = 1
    cursor = index + step
    while 0 <= cursor < len(text):
        char = text[cursor]
        if char == bracket:
            depth += 1
        elif char == partner:
            depth -= 1
            if depth == 0:
                return cursor
        cursor += step
    return None


_MOTION_HANDLERS: Dict[str, MotionHandler] = {
    "line": _line,
    "jump": _jump,
    "h": _left,
    "l": _right,
    "j": partial(_vertical, direction=1),
    "k": partial(_vertical, direction=-1),
    "0": _line_start,
    "^": _first_non_blank,
    "$": _line_end,
    "w": partial(_word_forward, finder=word_at),
    "W": partial(_word_forward, finder=big_word_at),
    "e": partial(_word_end, finder=word_at),
    "E": partial(_word_end, finder=big_word_at),
    "b": partial(_word_backward, finder=word_at, inclusive=False),
    "B": partial(_word_backward, finder=big_word_at, inclusive=True),
    "f": partial(_find_forward, until=False),
    "t": partial(_find_forward, until=True),
    "F": partial(_find_backward, until=False),
    "T": partial(_find_backward, until=True),
    "G": _last_line,
    "gg": _first_line,
    "-": partial(_relative_line, direction=-1),
    "+": partial(_relative_line, direction=1),
    "\n": partial(_relative_line, direction=1),
    "_": partial(_relative_line, direction=1, offset=1),
    "%": _percent,
}

MOTIONS = frozenset(_MOTION_HANDLERS) | {"`", "'", ";", ","}


def calculate_motion(
    document: TextDocument, action: MotionAction, index: int
) -> Optional[MotionRange]:
    """Pure motion lookup for everything except marks and find repeats."""

    handler = _MOTION_HANDLERS.get(action.motion)
    if handler is None:
        raise ValueError(f"Unknown motion '{action.motion}'")
    return handler(document, action, index)


def resolve_motion(
    document: TextDocument,
    action: MotionAction,
    index: int,
    *,
    marks: MarkStore,
    last_find: Optional[LastFind] = None,
) -> Optional[MotionRange]:
    """``calculate_motion`` plus the motions that read session state."""

    if action.motion in ("`", "'"):
        mark = marks.get(action.char or "")
        if mark is None:
            return None
        linewise = action.motion == "'"
        line = max(0, min(mark[0], document.line_count - 1))
        column = document.line(line).first_non_blank if linewise else mark[1]
        return MotionRange(index, document.offset_at(line, column), linewise=linewise)

    if action.motion in (";", ","):
        if last_find is None:
            return None
        motion = last_find.motion
        if action.motion == ",":
            motion = _REVERSED_FIND[motion]
        repeat = MotionAction(motion, count=action.count, char=last_find.char)
        result = calculate_motion(document, repeat, index)
        if result is not None and motion in ("t", "T") and result.start == result.end:
            result = calculate_motion(document, replace(repeat, count=action.count + 1), index)
        return result

    return calculate_motion(document, action, index)


__all__ = [
    "BRACKET_PAIRS",
    "LastFind",
    "MOTIONS",
    "MotionRange",
    "calculate_motion",
    "match_bracket",
    "resolve_motion",
]
