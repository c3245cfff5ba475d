"""Undo/redo history for the in-memory buffer.

Each entry snapshots the whole text on both sides of one edit batch, so undo
restores exactly what the batch replaced regardless of how many edits it held.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Selection


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    selection_before: Selection
    selection_after: Selection


class UndoTimeline:
    """Two stacks: applied batches and undone batches awaiting redo.

    ``limit`` caps the applied stack; the oldest entries fall off first.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 1:
            raise ValueError("undo limit must be positive")
        self.limit = limit
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done)

    def push(self, entry: UndoEntry) -> None:
        self._undone.clear()
        self._done.append(entry)
        if self.limit is not None and len(self._done) > self.limit:
            del self._done[0]

    def can_undo(self) -> bool:
        return bool(self._done)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry

    def clear(self) -> None:
        self._done.clear()
        self._undone.clear()


__all__ = ["UndoEntry", "UndoTimeline"]
