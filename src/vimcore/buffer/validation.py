"""Validation helpers shared by buffer hosts."""

from __future__ import annotations

from typing import Sequence

from .document import TextDocument
from .host import BufferValidationError, TextEdit
from .state import Selection


def ensure_index(document: TextDocument, index: int) -> int:
    if index < 0 or index > len(document):
        position = document.position_at(index)
        raise BufferValidationError(
            f"Index {index} outside document of length {len(document)}",
            cursor=position.cursor,
        )
    return index


def ensure_selection(document: TextDocument, selection: Selection) -> Selection:
    ensure_index(document, selection.anchor)
    ensure_index(document, selection.active)
    return selection


def ensure_edits(document: TextDocument, edits: Sequence[TextEdit]) -> list[TextEdit]:
    """Return ``edits`` sorted by start, rejecting bad or overlapping ranges."""

    ordered = sorted(edits, key=lambda edit: (edit.start, edit.end))
    previous_end = -1
    for edit in ordered:
        if edit.start > edit.end:
            raise BufferValidationError("Edit start is after its end", edits=edits)
        ensure_index(document, edit.start)
        ensure_index(document, edit.end)
        if edit.start < previous_end:
            raise BufferValidationError("Edits overlap", edits=edits)
        previous_end = edit.end
    return ordered


__all__ = ["ensure_edits", "ensure_index", "ensure_selection"]
