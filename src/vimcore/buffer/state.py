"""Cursor and selection values exchanged with the host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (line, column)


@dataclass(frozen=True, slots=True)
class Selection:
    """Anchor/active pair of absolute indices; the active end is the cursor."""

    anchor: int
    active: int

    @classmethod
    def caret(cls, index: int) -> "Selection":
        return cls(index, index)

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def is_empty(self) -> bool:
        return self.anchor == self.active

    def union(self, start: int, end: int) -> "Selection":
        return Selection(min(self.start, start), max(self.end, end))


__all__ = ["Cursor", "Selection"]
