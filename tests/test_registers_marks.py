from __future__ import annotations

import pytest

from vimcore.buffer import UNNAMED, MarkStore, RegisterStore, TextChange, TextDocument


def test_register_write_replaces_contents() -> None:
    registers = RegisterStore()

    registers.write(UNNAMED, False, "abc")
    registers.write(UNNAMED, True, "line\n")

    register = registers.read()
    assert register is not None
    assert register.linewise
    assert register.text == "line\n"
    assert registers.read("a") is None


def test_register_names_are_single_characters() -> None:
    with pytest.raises(ValueError):
        RegisterStore().write("ab", False, "x")


def test_register_repeated_text() -> None:
    register = RegisterStore().write("a", False, "xy")

    assert register.repeated(3) == "xyxyxy"
    assert register.repeated(0) == "xy"


def test_mark_accepts_positions() -> None:
    marks = MarkStore()
    doc = TextDocument("abc\ndef")

    marks.set("a", doc.position_at(5))

    assert marks.get("a") == (1, 1)
    assert "a" in marks


def test_mark_inside_change_is_dropped() -> None:
    marks = MarkStore()
    marks.set("a", (1, 2))

    marks.apply_changes([TextChange((1, 0), (1, 4), "")])

    assert marks.get("a") is None


def test_mark_after_change_shifts_by_line_delta() -> None:
    marks = MarkStore()
    marks.set("a", (5, 3))
    marks.set("b", (0, 1))

    marks.apply_changes([TextChange((2, 0), (4, 0), "x\n")])

    assert marks.get("a") == (4, 3)
    assert marks.get("b") == (0, 1)


def test_mark_on_same_line_after_change_keeps_column() -> None:
    marks = MarkStore()
    marks.set("a", (1, 8))

    marks.apply_changes([TextChange((1, 0), (1, 2), "\n\n")])

    assert marks.get("a") == (3, 8)
