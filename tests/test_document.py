from __future__ import annotations

import pytest

from vimcore.buffer import TextDocument
from vimcore.motions import WordType, big_word_at, word_at


def make_document(text: str = "abc def\n  ghi\n") -> TextDocument:
    return TextDocument(text)


def test_document_lines_include_trailing_empty_line() -> None:
    doc = make_document()

    assert doc.line_count == 3
    assert doc.lines() == ("abc def", "  ghi", "")


def test_line_boundaries() -> None:
    doc = make_document()

    second = doc.line(1)

    assert (second.start, second.end) == (8, 13)
    assert second.text == "  ghi"
    assert second.first_non_blank == 2
    assert doc.line(2).is_empty


def test_line_out_of_range_raises() -> None:
    with pytest.raises(IndexError):
        make_document().line(5)


def test_position_round_trip() -> None:
    doc = make_document()

    position = doc.position_at(10)

    assert position.cursor == (1, 2)
    assert doc.offset_at(1, 2) == 10


def test_position_at_clamps_index() -> None:
    doc = make_document("abc")

    assert doc.position_at(-4).index == 0
    assert doc.position_at(99).index == 3


def test_position_from_line_clamps_column() -> None:
    doc = make_document()

    assert doc.position_from_line(1, 40).cursor == (1, 5)
    assert doc.position_from_line(9, 0).index == len(doc)


def test_translate_without_clamp_rejects_missing_column() -> None:
    doc = make_document("abcdef\nab")

    position = doc.position_at(5)

    assert position.translate(1, 0) is None
    clamped = position.translate(1, 0, clamp=True)
    assert clamped is not None
    assert clamped.cursor == (1, 2)


def test_blank_line_first_non_blank_is_length() -> None:
    doc = make_document("   \nx")

    assert doc.line(0).first_non_blank == 3


def test_get_text_orders_bounds() -> None:
    doc = make_document()

    assert doc.get_text(7, 4) == "def"
    assert doc.char_at(len(doc)) is None


def test_word_at_classifies_runs() -> None:
    text = "foo.bar  baz"

    word = word_at(text, 1)
    symbol = word_at(text, 3)
    space = word_at(text, 8)

    assert (word.start, word.end, word.type) == (0, 2, WordType.TEXT)
    assert (symbol.start, symbol.end, symbol.type) == (3, 3, WordType.SYMBOL)
    assert (space.start, space.end, space.type) == (7, 8, WordType.WHITESPACE)


def test_big_word_merges_symbols() -> None:
    word = big_word_at("foo.bar  baz", 4)

    assert word is not None
    assert (word.start, word.end, word.type) == (0, 6, WordType.TEXT)


def test_word_at_out_of_range() -> None:
    assert word_at("abc", 3) is None
    assert word_at("", 0) is None
