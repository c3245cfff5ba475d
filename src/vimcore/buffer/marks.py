"""Named bookmarks kept in step with document edits."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional

from .host import TextChange
from .position import Position
from .state import Cursor


class MarkStore:
    """Marks stored as ``(line, column)`` pairs.

    A mark inside a replaced range (both ends included) is dropped. A mark
    after the range moves by the net number of lines the change added or
    removed; its column is left alone.
    """

    def __init__(self) -> None:
        self._marks: Dict[str, Cursor] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._marks

    def __len__(self) -> int:
        return len(self._marks)

    def set(self, name: str, position: Cursor | Position) -> None:
        if isinstance(position, Position):
            position = position.cursor
        self._marks[name] = (position[0], position[1])

    def get(self, name: str) -> Optional[Cursor]:
        return self._marks.get(name)

    def snapshot(self) -> Mapping[str, Cursor]:
        return dict(self._marks)

    def apply_changes(self, changes: Iterable[TextChange]) -> None:
        for change in changes:
            self._apply(change)

    def _apply(self, change: TextChange) -> None:
        net_lines = change.inserted_lines - change.spanned_lines
        updated: Dict[str, Cursor] = {}
        for name, mark in self._marks.items():
            if change.start <= mark <= change.end:
                continue
            if mark < change.start or net_lines == 0:
                updated[name] = mark
                continue
            updated[name] = (mark[0] + net_lines, mark[1])
        self._marks = updated


__all__ = ["MarkStore"]
