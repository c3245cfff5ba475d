from __future__ import annotations

from vimcore.actions import (
    ChangeModeAction,
    InstantAction,
    MotionAction,
    ObjectAction,
    OperatorAction,
    ReplaceAction,
)
from vimcore.buffer import Buffer, MarkStore, RegisterStore
from vimcore.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vimcore.modes import CommandParser, ModeBus, ModeContext, PendingKind, VimMode
from vimcore.motions import JumpIndex, LastFind
from vimcore.runtime import EngineConfig


def make_parser(text: str = "abc def") -> tuple[CommandParser, list[str]]:
    context = ModeContext(
        host=Buffer(text),
        registers=RegisterStore(),
        marks=MarkStore(),
        bus=ModeBus(),
        config=EngineConfig(),
        jumps=JumpIndex(),
    )
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resets: list[str] = []
    parser = CommandParser(context, KeymapResolver(registry))

    def on_reset() -> None:
        resets.append("reset")
        parser.reset()

    parser.on_reset = on_reset
    return parser, resets


def feed(parser: CommandParser, keys: str, mode: VimMode = VimMode.NORMAL):
    result = None
    for key in keys:
        result = parser.resolve(key, mode)
    return result


def test_single_motion() -> None:
    parser, _ = make_parser()

    assert feed(parser, "w") == MotionAction("w", count=1)


def test_count_prefixes_motion() -> None:
    parser, _ = make_parser()

    assert feed(parser, "12j") == MotionAction("j", count=12)


def test_zero_is_motion_unless_counting() -> None:
    parser, _ = make_parser()

    assert feed(parser, "0") == MotionAction("0", count=1)
    parser.reset()
    assert feed(parser, "10l") == MotionAction("l", count=10)


def test_big_g_defaults_to_unspecified_count() -> None:
    parser, _ = make_parser()

    assert feed(parser, "G") == MotionAction("G", count=0)
    parser.reset()
    assert feed(parser, "%") == MotionAction("%", count=0)
    parser.reset()
    assert feed(parser, "3G") == MotionAction("G", count=3)


def test_g_prefix_sequences() -> None:
    parser, _ = make_parser()

    assert parser.resolve("g", VimMode.NORMAL) is None
    assert parser.pending is PendingKind.PREFIX
    assert parser.resolve("g", VimMode.NORMAL) == MotionAction("gg", count=0)
    parser.reset()
    assert feed(parser, "gI") == ChangeModeAction("gI", count=1)


def test_find_records_last_find() -> None:
    parser, _ = make_parser()

    action = feed(parser, "2fx")

    assert action == MotionAction("f", count=2, char="x")
    assert parser.context.last_find == LastFind("f", "x")


def test_operator_moves_count_aside() -> None:
    parser, _ = make_parser()

    operator = feed(parser, "2d")
    motion = feed(parser, "3w", VimMode.OPERATOR_PENDING)

    assert operator == OperatorAction("d", count=2)
    assert motion == MotionAction("w", count=6)


def test_doubled_operator_is_line_motion() -> None:
    parser, _ = make_parser()

    feed(parser, "d")
    action = parser.resolve("d", VimMode.OPERATOR_PENDING)

    assert action == MotionAction("line", count=1)


def test_operator_pending_g_keeps_unspecified_count() -> None:
    parser, _ = make_parser()

    feed(parser, "d")

    assert feed(parser, "G", VimMode.OPERATOR_PENDING) == MotionAction("G", count=0)


def test_register_selection_flows_into_operator() -> None:
    parser, _ = make_parser()

    assert feed(parser, '"a') is None
    assert parser.resolve("y", VimMode.NORMAL) == OperatorAction("y", register="a")


def test_instants_carry_register_and_count() -> None:
    parser, _ = make_parser()

    assert feed(parser, '"b3p') == InstantAction("p", count=3, register="b")


def test_replace_and_mark_pseudo_modes() -> None:
    parser, _ = make_parser()

    assert feed(parser, "2rz") == ReplaceAction("z", count=2)
    parser.reset()
    assert feed(parser, "mq") == InstantAction("m", char="q")
    parser.reset()
    assert feed(parser, "'q") == MotionAction("'", char="q")


def test_text_object_in_operator_pending() -> None:
    parser, _ = make_parser()

    feed(parser, "c")
    action = feed(parser, "iw", VimMode.OPERATOR_PENDING)

    assert action == ObjectAction("i", "w")
    assert action.include_delimiters is False


def test_invalid_object_key_resets() -> None:
    parser, resets = make_parser()

    feed(parser, "d")
    assert feed(parser, "iz", VimMode.OPERATOR_PENDING) is None
    assert resets == ["reset"]


def test_visual_instants_resolve_directly() -> None:
    parser, _ = make_parser()

    assert feed(parser, "U", VimMode.VISUAL) == InstantAction("U")
    assert feed(parser, "aw", VimMode.VISUAL) == ObjectAction("a", "w")


def test_unknown_key_resets_state() -> None:
    parser, resets = make_parser()

    assert feed(parser, "3z") is None
    assert resets == ["reset"]
    assert parser.state.entered_count == ""


def test_jump_with_single_match_resolves() -> None:
    parser, _ = make_parser("abc def")

    action = feed(parser, "Qd")

    assert action == MotionAction("jump", target=4)


def test_jump_with_several_matches_waits_for_label() -> None:
    parser, _ = make_parser("a b a b")
    labels: list[object] = []
    parser.context.bus.subscribe("jump.labels", labels.append)

    assert feed(parser, "Qb") is None
    assert parser.pending is PendingKind.JUMP_LABEL
    assert labels == [{"A": (2,), "B": (6,)}]
    assert parser.resolve("b", VimMode.JUMP) == MotionAction("jump", target=6)
