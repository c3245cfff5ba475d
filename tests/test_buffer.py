from __future__ import annotations

import asyncio

import pytest

from vimcore.buffer import (
    Buffer,
    BufferValidationError,
    HostOperationError,
    Selection,
    TextChange,
    TextEdit,
    UndoTimeline,
)


def make_buffer(text: str = "hello world", *, cursor: int = 0) -> Buffer:
    return Buffer(text, selection=Selection.caret(cursor))


def test_apply_edits_is_atomic_and_shifts_selection() -> None:
    buffer = make_buffer(cursor=8)

    applied = asyncio.run(
        buffer.apply_edits([TextEdit(6, 11, "there"), TextEdit.insert(0, ">> ")])
    )

    assert applied
    assert buffer.text == ">> hello there"
    assert buffer.selection == Selection.caret(14)


def test_cursor_reports_line_and_column() -> None:
    buffer = make_buffer("ab\ncd", cursor=4)

    assert buffer.cursor == (1, 1)
    buffer.set_cursor(0, 9)
    assert buffer.selection == Selection.caret(2)


def test_overlapping_edits_are_rejected() -> None:
    buffer = make_buffer()

    with pytest.raises(BufferValidationError):
        asyncio.run(buffer.apply_edits([TextEdit(0, 4), TextEdit(2, 6)]))
    assert buffer.text == "hello world"


def test_validation_error_is_a_host_error() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(HostOperationError):
        asyncio.run(buffer.apply_edits([TextEdit(2, 9)]))


def test_selection_outside_document_is_rejected() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.set_selection(Selection(0, 9))


def test_undo_and_redo_restore_text() -> None:
    buffer = make_buffer("abc", cursor=1)
    asyncio.run(buffer.apply_edits([TextEdit.delete(1, 2)]))

    assert asyncio.run(buffer.undo())
    assert buffer.text == "abc"
    assert buffer.selection == Selection.caret(1)
    assert asyncio.run(buffer.redo())
    assert buffer.text == "ac"
    assert not asyncio.run(buffer.redo())


def test_undo_with_empty_history() -> None:
    assert not asyncio.run(make_buffer().undo())


def test_listeners_receive_pre_edit_coordinates() -> None:
    buffer = make_buffer("ab\ncd\nef")
    seen: list[TextChange] = []
    unsubscribe = buffer.subscribe_changes(seen.extend)

    asyncio.run(buffer.apply_edits([TextEdit(1, 4, "X"), TextEdit.insert(8, "!")]))
    unsubscribe()
    asyncio.run(buffer.apply_edits([TextEdit.insert(0, "-")]))

    assert seen == [
        TextChange((2, 2), (2, 2), "!"),
        TextChange((0, 1), (1, 1), "X"),
    ]


def test_undo_notifies_listeners() -> None:
    buffer = make_buffer("one\ntwo")
    asyncio.run(buffer.apply_edits([TextEdit.delete(0, 4)]))
    seen: list[TextChange] = []
    buffer.subscribe_changes(seen.extend)

    asyncio.run(buffer.undo())

    assert seen == [TextChange((0, 0), (0, 0), "one\n")]


def test_undo_limit_drops_oldest_batches() -> None:
    buffer = Buffer("a", undo=UndoTimeline(limit=2))
    for char in "bcd":
        asyncio.run(buffer.apply_edits([TextEdit.insert(len(buffer.text), char)]))

    assert asyncio.run(buffer.undo())
    assert asyncio.run(buffer.undo())
    assert not asyncio.run(buffer.undo())
    assert buffer.text == "ab"
