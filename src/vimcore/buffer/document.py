"""Read-only text snapshot with index and line/column conversions."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Sequence

from .position import Position


@dataclass(frozen=True, slots=True)
class TextLine:
    """One line of a ``TextDocument``.

    ``start`` and ``end`` are absolute indices; ``end`` points at the line
    separator (or the end of the text for the last line), so
    ``text == document.text[start:end]``.
    """

    number: int
    text: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def first_non_blank(self) -> int:
        stripped = self.text.lstrip(" \t")
        if not stripped:
            return len(self.text)
        return len(self.text) - len(stripped)


@dataclass(slots=True)
class TextDocument:
    """Immutable view over a block of text split on ``\\n``.

    A trailing separator yields a final empty line, so a document always has
    at least one line.
    """

    text: str = ""
    version: int = 0
    _starts: List[int] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        starts = [0]
        for index, char in enumerate(self.text):
            if char == "\n":
                starts.append(index + 1)
        self._starts = starts

    def __len__(self) -> int:
        return len(self.text)

    @property
    def line_count(self) -> int:
        return len(self._starts)

    def lines(self) -> Sequence[str]:
        return tuple(self.line(number).text for number in range(self.line_count))

    def line(self, number: int) -> TextLine:
        if not 0 <= number < self.line_count:
            raise IndexError(f"line {number} outside document of {self.line_count} lines")
        start = self._starts[number]
        if number + 1 < self.line_count:
            end = self._starts[number + 1] - 1
        else:
            end = len(self.text)
        return TextLine(number=number, text=self.text[start:end], start=start, end=end)

    def line_at(self, index: int) -> TextLine:
        return self.line(self.position_at(index).line)

    def clamp_index(self, index: int) -> int:
        return max(0, min(index, len(self.text)))

    def position_at(self, index: int) -> Position:
        """Position for ``index``, clamped into ``[0, len(text)]``."""

        index = self.clamp_index(index)
        line = bisect_right(self._starts, index) - 1
        return Position(index=index, line=line, column=index - self._starts[line], document=self)

    def position_from_line(self, line: int, column: int) -> Position:
        """Position for ``(line, column)``, clamped to the nearest valid spot."""

        if line < 0:
            return self.position_at(0)
        if line >= self.line_count:
            return self.position_at(len(self.text))
        target = self.line(line)
        column = max(0, min(column, target.length))
        return Position(index=target.start + column, line=line, column=column, document=self)

    def offset_at(self, line: int, column: int) -> int:
        return self.position_from_line(line, column).index

    def get_text(self, start: int, end: int) -> str:
        if start > end:
            start, end = end, start
        return self.text[self.clamp_index(start) : self.clamp_index(end)]

    def char_at(self, index: int) -> str | None:
        if 0 <= index < len(self.text):
            return self.text[index]
        return None


__all__ = ["TextDocument", "TextLine"]
