"""Mode-changing actions: entering Insert and Visual mode from Normal."""

from __future__ import annotations

from functools import partial
from typing import Awaitable, Callable, Dict

from vimcore.buffer import TextEdit
from vimcore.modes.base_mode import ModeContext, ModeResult, VimMode

from .models import ChangeModeAction

ChangeModeHandler = Callable[[ModeContext, ChangeModeAction], Awaitable[ModeResult]]


def _switch(mode: VimMode, message: str) -> ModeResult:
    return ModeResult(consumed=True, switch_to=mode, message=message)


async def enter_insert_mode(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    del context, action
    return _switch(VimMode.INSERT, "enter_insert")


async def insert_at_first_non_blank(
    context: ModeContext, action: ChangeModeAction
) -> ModeResult:
    del action
    line = context.document().line_at(context.cursor)
    context.move_cursor(line.start + line.first_non_blank)
    return _switch(VimMode.INSERT, "enter_insert")


async def append_after_cursor(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    del action
    line = context.document().line_at(context.cursor)
    context.move_cursor(min(context.cursor + 1, line.end))
    return _switch(VimMode.INSERT, "enter_insert")


async def append_at_line_end(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    del action
    context.move_cursor(context.document().line_at(context.cursor).end)
    return _switch(VimMode.INSERT, "enter_insert")


async def insert_at_column_zero(
    context: ModeContext, action: ChangeModeAction
) -> ModeResult:
    del action
    context.move_cursor(context.document().line_at(context.cursor).start)
    return _switch(VimMode.INSERT, "enter_insert")


async def open_line(
    context: ModeContext, action: ChangeModeAction, *, below: bool
) -> ModeResult:
    """``o``/``O``: open an empty line and start inserting on it."""

    del action
    line = context.document().line_at(context.cursor)
    indent = ""
    if context.config.open_line_copies_indent:
        indent = line.text[: line.first_non_blank]
    if below:
        await context.edit([TextEdit.insert(line.end, "\n" + indent)])
        context.move_cursor(line.end + 1 + len(indent))
    else:
        await context.edit([TextEdit.insert(line.start, indent + "\n")])
        context.move_cursor(line.start + len(indent))
    return _switch(VimMode.INSERT, "open_line")


async def enter_visual_mode(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    del context, action
    return _switch(VimMode.VISUAL, "enter_visual")


async def exit_to_normal_mode(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    del context, action
    return _switch(VimMode.NORMAL, "exit_to_normal")


CHANGE_MODE_ACTIONS: Dict[str, ChangeModeHandler] = {
    "i": enter_insert_mode,
    "I": insert_at_first_non_blank,
    "a": append_after_cursor,
    "A": append_at_line_end,
    "gI": insert_at_column_zero,
    "o": partial(open_line, below=True),
    "O": partial(open_line, below=False),
    "v": enter_visual_mode,
    "V": exit_to_normal_mode,
}


async def change_mode(context: ModeContext, action: ChangeModeAction) -> ModeResult:
    handler = CHANGE_MODE_ACTIONS.get(action.mode, exit_to_normal_mode)
    return await handler(context, action)


__all__ = [
    "CHANGE_MODE_ACTIONS",
    "append_after_cursor",
    "append_at_line_end",
    "change_mode",
    "enter_insert_mode",
    "enter_visual_mode",
    "exit_to_normal_mode",
    "insert_at_column_zero",
    "insert_at_first_non_blank",
    "open_line",
]
