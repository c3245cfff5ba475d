"""Boundary types describing how the engine talks to a host text buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from .state import Cursor, Selection


@dataclass(frozen=True, slots=True)
class TextEdit:
    """Replace ``[start, end)`` of the pre-edit text with ``text``."""

    start: int
    end: int
    text: str = ""

    @classmethod
    def insert(cls, index: int, text: str) -> "TextEdit":
        return cls(index, index, text)

    @classmethod
    def delete(cls, start: int, end: int) -> "TextEdit":
        return cls(start, end, "")


@dataclass(frozen=True, slots=True)
class TextChange:
    """Change notification: the replaced line/column range and inserted text."""

    start: Cursor
    end: Cursor
    text: str = ""

    @property
    def spanned_lines(self) -> int:
        return abs(self.end[0] - self.start[0])

    @property
    def inserted_lines(self) -> int:
        return self.text.count("\n")


ChangeListener = Callable[[Sequence[TextChange]], None]


class TextHost(Protocol):
    """What the engine needs from an editor buffer."""

    @property
    def selection(self) -> Selection:
        """Current primary selection."""
        ...

    def get_text(self) -> str:
        """Return the whole document text."""
        ...

    def set_selection(self, selection: Selection) -> None:
        """Move the cursor / selection."""
        ...

    async def apply_edits(self, edits: Sequence[TextEdit]) -> bool:
        """Apply non-overlapping edits atomically; ``False`` means rejected."""
        ...

    async def undo(self) -> bool:
        """Revert the most recent edit batch."""
        ...

    def subscribe_changes(self, callback: ChangeListener) -> Callable[[], None]:
        """Register ``callback`` for change notifications; returns an unsubscriber."""
        ...


class HostOperationError(RuntimeError):
    """Raised when the host rejects or cannot complete a requested operation."""

    def __init__(self, message: str, *, edits: Sequence[TextEdit] = ()) -> None:
        super().__init__(message)
        self.edits = tuple(edits)


class BufferValidationError(HostOperationError):
    """Raised when an edit or selection falls outside the document."""

    def __init__(
        self,
        message: str,
        *,
        edits: Sequence[TextEdit] = (),
        cursor: Cursor | None = None,
    ) -> None:
        super().__init__(message, edits=edits)
        self.cursor = cursor


__all__ = [
    "BufferValidationError",
    "ChangeListener",
    "HostOperationError",
    "TextChange",
    "TextEdit",
    "TextHost",
]
