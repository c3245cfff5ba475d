"""Absolute index paired with its line/column coordinates."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .document import TextDocument


@dataclass(frozen=True, slots=True)
class Position:
    index: int
    line: int
    column: int
    document: "TextDocument" = field(compare=False, repr=False)

    def translate(
        self, line_delta: int = 0, column_delta: int = 0, *, clamp: bool = False
    ) -> Optional["Position"]:
        """Move by the given deltas.

        Without ``clamp`` a target outside the document (or a column the
        target line does not have) yields ``None``; with ``clamp`` the
        nearest valid position is returned instead.
        """

        line = self.line + line_delta
        column = self.column + column_delta
        if line < 0:
            return self.document.position_at(0) if clamp else None
        moved = self.document.position_from_line(line, column)
        if not clamp and (moved.line != line or moved.column != column):
            return None
        return moved

    def is_before(self, other: "Position") -> bool:
        return (self.line, self.column) < (other.line, other.column)

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.line, self.column)


__all__ = ["Position"]
