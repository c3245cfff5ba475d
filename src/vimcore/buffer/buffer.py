"""In-memory ``TextHost`` implementation with undo and change notifications."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Callable, ContextManager, List, Optional, Sequence

from vimcore.runtime import telemetry

from .document import TextDocument
from .host import ChangeListener, TextChange, TextEdit
from .state import Cursor, Selection
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_edits, ensure_selection


class Buffer:
    """Plain text buffer satisfying the ``TextHost`` protocol.

    Edits are applied atomically, recorded on an ``UndoTimeline`` and
    reported to subscribers as ``TextChange`` lists expressed in pre-edit
    coordinates, last change first.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        selection: Optional[Selection] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._document = TextDocument(text)
        self._selection = ensure_selection(self._document, selection or Selection.caret(0))
        self.history = undo if undo is not None else UndoTimeline()
        self._listeners: List[ChangeListener] = []

    @property
    def document(self) -> TextDocument:
        return self._document

    @property
    def text(self) -> str:
        return self._document.text

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def cursor(self) -> Cursor:
        return self._document.position_at(self._selection.active).cursor

    def get_text(self) -> str:
        return self._document.text

    def set_selection(self, selection: Selection) -> None:
        self._selection = ensure_selection(self._document, selection)

    def set_cursor(self, line: int, column: int) -> None:
        index = self._document.offset_at(line, column)
        self._selection = Selection.caret(index)

    def subscribe_changes(self, callback: ChangeListener) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def apply_edits(self, edits: Sequence[TextEdit], *, label: str = "edit") -> bool:
        if not edits:
            return True
        before = self._document
        ordered = ensure_edits(before, edits)
        with Transaction(self, label) as tx:
            pieces: List[str] = []
            consumed = 0
            for edit in ordered:
                pieces.append(before.text[consumed : edit.start])
                pieces.append(edit.text)
                consumed = edit.end
            pieces.append(before.text[consumed:])

            selection_before = self._selection
            self._document = TextDocument("".join(pieces), version=before.version + 1)
            self._selection = Selection(
                _shift_index(selection_before.anchor, ordered),
                _shift_index(selection_before.active, ordered),
            )
            tx.commit(before.text, self._document.text, selection_before, self._selection)

        changes = [
            TextChange(
                before.position_at(edit.start).cursor,
                before.position_at(edit.end).cursor,
                edit.text,
            )
            for edit in reversed(ordered)
        ]
        self._notify(changes)
        return True

    async def undo(self) -> bool:
        entry = self.history.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.selection_before, label="undo")
        return True

    async def redo(self) -> bool:
        entry = self.history.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.selection_after, label="redo")
        return True

    def _restore(self, text: str, selection: Selection, *, label: str) -> None:
        with telemetry.span(
            f"buffer::{label}", component="buffer", metadata={"buffer": self.name}
        ):
            before = self._document
            change = _diff(before, text)
            self._document = TextDocument(text, version=before.version + 1)
            self._selection = ensure_selection(self._document, selection)
        if change is not None:
            self._notify([change])

    def _notify(self, changes: Sequence[TextChange]) -> None:
        for listener in list(self._listeners):
            listener(changes)


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span plus undo recording around one edit batch."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        selection_before: Selection,
        selection_after: Selection,
    ) -> None:
        self.buffer.history.push(
            UndoEntry(
                label=self.label,
                before_text=before_text,
                after_text=after_text,
                selection_before=selection_before,
                selection_after=selection_after,
            )
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _shift_index(index: int, edits: Sequence[TextEdit]) -> int:
    delta = 0
    for edit in edits:
        if index < edit.start:
            break
        if index >= edit.end:
            delta += len(edit.text) - (edit.end - edit.start)
            continue
        return edit.start + delta + len(edit.text)
    return index + delta


def _diff(before: TextDocument, after: str) -> Optional[TextChange]:
    old = before.text
    if old == after:
        return None
    limit = min(len(old), len(after))
    prefix = 0
    while prefix < limit and old[prefix] == after[prefix]:
        prefix += 1
    suffix = 0
    while (
        suffix < limit - prefix
        and old[len(old) - 1 - suffix] == after[len(after) - 1 - suffix]
    ):
        suffix += 1
    return TextChange(
        before.position_at(prefix).cursor,
        before.position_at(len(old) - suffix).cursor,
        after[prefix : len(after) - suffix],
    )


__all__ = ["Buffer", "Transaction"]
