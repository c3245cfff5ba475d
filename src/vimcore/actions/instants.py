"""Single-key commands that act immediately, in Normal and Visual mode."""

from __future__ import annotations

from functools import partial
from typing import Awaitable, Callable, Dict

from vimcore.buffer import Selection, TextEdit
from vimcore.modes.base_mode import ModeContext, ModeResult, VimMode
from vimcore.motions import MotionRange, calculate_motion

from .models import InstantAction, MotionAction, OperatorCommand, ReplaceAction
from .operators import apply_operator, perform_operation

InstantHandler = Callable[[ModeContext, InstantAction], Awaitable[ModeResult]]


def _normal() -> ModeResult:
    return ModeResult(consumed=True, switch_to=VimMode.NORMAL)


async def _undo(context: ModeContext, action: InstantAction) -> ModeResult:
    for _ in range(max(1, action.count)):
        if not await context.host.undo():
            break
    return _normal()


async def _delete_forward(
    context: ModeContext, action: InstantAction, *, operator: str
) -> ModeResult:
    doc = context.document()
    cursor = context.cursor
    end = min(cursor + action.count, doc.line_at(cursor).end)
    if end <= cursor:
        if operator == "c":
            return ModeResult(consumed=True, switch_to=VimMode.INSERT)
        return _normal()
    return await perform_operation(
        context, operator, MotionRange(cursor, end), action.register
    )


async def _delete_backward(context: ModeContext, action: InstantAction) -> ModeResult:
    doc = context.document()
    cursor = context.cursor
    start = max(cursor - action.count, doc.line_at(cursor).start)
    if start == cursor:
        return _normal()
    return await perform_operation(
        context, "d", MotionRange(start, cursor), action.register
    )


async def _to_line_end(
    context: ModeContext, action: InstantAction, *, operator: str
) -> ModeResult:
    doc = context.document()
    cursor = doc.position_at(context.cursor)
    last = doc.line(min(cursor.line + action.count - 1, doc.line_count - 1))
    if last.end <= cursor.index:
        if operator == "c":
            return ModeResult(consumed=True, switch_to=VimMode.INSERT)
        return _normal()
    return await perform_operation(
        context, operator, MotionRange(cursor.index, last.end), action.register
    )


async def _whole_lines(
    context: ModeContext, action: InstantAction, *, operator: str
) -> ModeResult:
    lines = calculate_motion(
        context.document(), MotionAction("line", count=action.count), context.cursor
    )
    assert lines is not None
    return await perform_operation(context, operator, lines, action.register)


async def _paste(
    context: ModeContext, action: InstantAction, *, before: bool
) -> ModeResult:
    register = context.registers.read(action.register)
    if register is None or not register.text:
        return _normal()

    doc = context.document()
    cursor = doc.position_at(context.cursor)
    line = doc.line(cursor.line)
    text = register.repeated(action.count)

    if register.linewise:
        if before:
            insert_at = landing = line.start
        elif line.number == doc.line_count - 1:
            insert_at = line.end
            text = "\n" + text.rstrip("\r\n")
            landing = insert_at + 1
        else:
            insert_at = landing = line.end + 1
        await context.edit([TextEdit.insert(insert_at, text)])
        context.move_cursor(landing)
        return _normal()

    insert_at = cursor.index if before else min(cursor.index + 1, line.end)
    await context.edit([TextEdit.insert(insert_at, text)])
    if "\n" in text:
        context.move_cursor(insert_at)
    else:
        context.move_cursor(insert_at + len(text) - 1)
    return _normal()


async def _set_mark(context: ModeContext, action: InstantAction) -> ModeResult:
    if action.char:
        context.marks.set(action.char, context.document().position_at(context.cursor))
    return _normal()


async def _repeat(context: ModeContext, action: InstantAction) -> ModeResult:
    del action
    return await repeat_last_change(context)


NORMAL_INSTANTS: Dict[str, InstantHandler] = {
    "u": _undo,
    "x": partial(_delete_forward, operator="d"),
    "s": partial(_delete_forward, operator="c"),
    "X": _delete_backward,
    "D": partial(_to_line_end, operator="d"),
    "C": partial(_to_line_end, operator="c"),
    "Y": partial(_whole_lines, operator="y"),
    "S": partial(_whole_lines, operator="c"),
    "p": partial(_paste, before=False),
    "P": partial(_paste, before=True),
    "m": _set_mark,
    ".": _repeat,
}

UNREPEATABLE = frozenset("um.")


async def run_instant(context: ModeContext, action: InstantAction) -> ModeResult:
    handler = NORMAL_INSTANTS.get(action.instant)
    if handler is None:
        return ModeResult(consumed=False, switch_to=VimMode.NORMAL, status="ignored")
    return await handler(context, action)


async def replace_characters(context: ModeContext, action: ReplaceAction) -> ModeResult:
    """``r<char>``: overwrite ``count`` characters when the line has room."""

    doc = context.document()
    cursor = doc.position_at(context.cursor)
    if cursor.column + action.count <= doc.line(cursor.line).length:
        await context.edit(
            [TextEdit(cursor.index, cursor.index + action.count, action.char * action.count)]
        )
        context.move_cursor(cursor.index + action.count - 1)
    return _normal()


_VISUAL_ALIASES = {"x": "d", "s": "c", "X": "D", "R": "C", "S": "C"}


async def run_visual_instant(context: ModeContext, action: InstantAction) -> ModeResult:
    """Apply a Visual-mode instant to the current selection."""

    instant = _VISUAL_ALIASES.get(action.instant, action.instant)
    selection = context.selection
    doc = context.document()

    if instant in ("d", "c", "y"):
        motion = MotionRange(selection.start, selection.end)
        result = await perform_operation(context, instant, motion, action.register)
        context.move_cursor(selection.start)
        return result

    if instant in ("D", "C", "Y"):
        motion = MotionRange(selection.start, selection.end, linewise=True)
        result = await perform_operation(context, instant.lower(), motion, action.register)
        if instant != "C":
            context.move_cursor(doc.line_at(selection.start).start)
        return result

    if instant in ("u", "U"):
        text = doc.get_text(selection.start, selection.end)
        changed = text.upper() if instant == "U" else text.lower()
        await context.edit([TextEdit(selection.start, selection.end, changed)])
        context.move_cursor(selection.start)
        return _normal()

    return ModeResult(consumed=False, status="ignored")


async def replace_selection(context: ModeContext, action: ReplaceAction) -> ModeResult:
    """Visual ``r<char>``: every non-newline character becomes ``char``."""

    selection = context.selection
    text = context.document().get_text(selection.start, selection.end)
    replaced = "".join(char if char in "\r\n" else action.char for char in text)
    await context.edit([TextEdit(selection.start, selection.end, replaced)])
    context.host.set_selection(Selection.caret(selection.start))
    return _normal()


async def repeat_last_change(context: ModeContext) -> ModeResult:
    """Replay the last recorded change from the current cursor."""

    change = context.last_change
    if change is None:
        return _normal()
    if isinstance(change, OperatorCommand):
        result = await apply_operator(context, change.operator, change.target, change.register)
    elif isinstance(change, ReplaceAction):
        result = await replace_characters(context, change)
    else:
        result = await run_instant(context, change)
    if result.switch_to is VimMode.INSERT:
        result.switch_to = VimMode.NORMAL
    result.reset = True
    return result


__all__ = [
    "NORMAL_INSTANTS",
    "UNREPEATABLE",
    "replace_characters",
    "replace_selection",
    "repeat_last_change",
    "run_instant",
    "run_visual_instant",
]
