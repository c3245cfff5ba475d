from __future__ import annotations

import pytest

from vimcore.actions import MotionAction
from vimcore.buffer import MarkStore, TextDocument
from vimcore.motions import LastFind, MotionRange, calculate_motion, resolve_motion


def move(text: str, motion: str, index: int, *, count: int = 1, char: str | None = None):
    return calculate_motion(
        TextDocument(text), MotionAction(motion, count=count, char=char), index
    )


def test_h_and_l_stay_on_line() -> None:
    text = "abc\ndef"

    assert move(text, "h", 4, count=3).end == 4
    assert move(text, "l", 1, count=10).end == 3
    assert move(text, "l", 5).end == 6


@pytest.mark.parametrize("index", [1, 2, 3, 5])
def test_h_undoes_l(index: int) -> None:
    text = "abcdefgh"
    doc = TextDocument(text)

    forward = calculate_motion(doc, MotionAction("l", count=2), index)
    back = calculate_motion(doc, MotionAction("h", count=2), forward.end)

    assert back.end == index


def test_j_k_clamp_column_and_fail_at_edges() -> None:
    text = "abcdef\nab\nabcd"

    down = move(text, "j", 5)
    assert down == MotionRange(5, 9, linewise=True)
    assert move(text, "j", 5, count=9).end == 14
    assert move(text, "k", 2) is None
    assert move(text, "j", 12) is None


def test_line_start_and_first_non_blank() -> None:
    text = "   foo bar"

    assert move(text, "0", 6).end == 0
    assert move(text, "^", 8).end == 3


def test_dollar_is_inclusive_and_counts_lines() -> None:
    text = "abc\ndefg\n"

    assert move(text, "$", 0) == MotionRange(0, 2, inclusive=True)
    assert move(text, "$", 0, count=2).end == 7
    assert move(text, "$", 9) == MotionRange(9, 9)


def test_w_skips_trailing_whitespace() -> None:
    text = "abc def ghi"

    assert move(text, "w", 0).end == 4
    assert move(text, "w", 0, count=2).end == 8
    assert move(text, "w", 8).end == len(text)


def test_w_stops_at_last_boundary_before_buffer_end() -> None:
    assert move("abc  ", "w", 0).end == 4
    assert move("a.b  ", "W", 0).end == 4
    assert move("abc  ", "w", 0, count=3).end == 4
    assert move("abc", "w", 0).end == 3
    assert move("abc", "W", 1).end == 3


def test_w_stops_at_symbols_but_big_w_does_not() -> None:
    text = "foo.bar baz"

    assert move(text, "w", 0).end == 3
    assert move(text, "W", 0).end == 8


def test_e_advances_past_current_word_end() -> None:
    text = "abc def"

    first = move(text, "e", 0)
    assert first == MotionRange(0, 2, inclusive=True)
    assert move(text, "e", 2).end == 6


def test_big_e_spans_symbols() -> None:
    text = "foo.bar baz"

    assert move(text, "e", 0) == MotionRange(0, 2, inclusive=True)
    assert move(text, "E", 0) == MotionRange(0, 6, inclusive=True)
    assert move(text, "E", 6).end == 10


def test_b_goes_to_previous_word_start() -> None:
    text = "abc def ghi"

    assert move(text, "b", 9).end == 8
    assert move(text, "b", 8).end == 4
    assert move(text, "b", 8, count=2).end == 0
    assert move(text, "B", 8).inclusive


def test_find_forward_and_until() -> None:
    text = "a,b,c\nx,y"

    assert move(text, "f", 0, char=",") == MotionRange(0, 1, inclusive=True)
    assert move(text, "f", 0, char=",", count=2).end == 3
    assert move(text, "t", 0, char="c").end == 3
    assert move(text, "f", 0, char="x") is None


def test_find_backward() -> None:
    text = "a,b,c"

    assert move(text, "F", 4, char=",") == MotionRange(4, 3)
    assert move(text, "T", 4, char=",").end == 4
    assert move(text, "F", 4, char="z") is None


def test_g_motions_land_on_first_non_blank() -> None:
    text = "one\n  two\nthree"

    assert move(text, "G", 0, count=0) == MotionRange(0, 10, linewise=True)
    assert move(text, "G", 0, count=2).end == 6
    assert move(text, "gg", 12, count=0).end == 0
    assert move(text, "G", 0, count=40).end == 10


def test_relative_line_motions() -> None:
    text = "one\n  two\nthree"

    assert move(text, "+", 0).end == 6
    assert move(text, "\n", 0, count=2).end == 10
    assert move(text, "-", 12).end == 6
    assert move(text, "_", 1).end == 0


def test_percent_matches_brackets() -> None:
    text = "(a(b)c)"

    assert move(text, "%", 0, count=0) == MotionRange(0, 6, inclusive=True)
    assert move(text, "%", 6, count=0).end == 0
    assert move(text, "%", 2, count=0).end == 4


def test_percent_scans_forward_for_bracket() -> None:
    assert move("x = f(1)", "%", 0, count=0).end == 7
    assert move("(abc", "%", 0, count=0) is None
    assert move("no brackets", "%", 0, count=0) is None


def test_percent_with_count_goes_to_line() -> None:
    text = "\n".join(str(number) for number in range(10))

    assert move(text, "%", 0, count=50).end == TextDocument(text).line(4).start
    assert move(text, "%", 0, count=100).end == TextDocument(text).line(9).start


def test_line_motion_spans_count_lines() -> None:
    text = "a\nb\nc"

    assert move(text, "line", 0, count=2) == MotionRange(0, 2, linewise=True)
    assert move(text, "line", 0, count=9).end == 5


def test_unknown_motion_raises() -> None:
    with pytest.raises(ValueError):
        move("abc", "?", 0)


def test_mark_motions() -> None:
    doc = TextDocument("abc\n   def")
    marks = MarkStore()
    marks.set("a", (1, 4))

    exact = resolve_motion(doc, MotionAction("`", char="a"), 0, marks=marks)
    line = resolve_motion(doc, MotionAction("'", char="a"), 0, marks=marks)
    missing = resolve_motion(doc, MotionAction("`", char="b"), 0, marks=marks)

    assert exact == MotionRange(0, 8)
    assert line == MotionRange(0, 7, linewise=True)
    assert missing is None


def test_repeat_find_and_reverse() -> None:
    doc = TextDocument("a,b,c,d")
    last = LastFind("f", ",")

    forward = resolve_motion(doc, MotionAction(";"), 1, marks=MarkStore(), last_find=last)
    backward = resolve_motion(doc, MotionAction(","), 3, marks=MarkStore(), last_find=last)

    assert forward.end == 3
    assert backward.end == 1


def test_repeat_until_always_advances() -> None:
    doc = TextDocument("a,b,c,d")
    last = LastFind("t", ",")

    repeated = resolve_motion(doc, MotionAction(";"), 0, marks=MarkStore(), last_find=last)

    assert repeated.end == 2


def test_repeat_without_previous_find() -> None:
    doc = TextDocument("abc")

    assert resolve_motion(doc, MotionAction(";"), 0, marks=MarkStore()) is None
