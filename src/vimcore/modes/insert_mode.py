"""Insert mode: typed keys replace the selection, ``<esc>`` returns to Normal."""

from __future__ import annotations

from vimcore.buffer import TextEdit
from vimcore.runtime import telemetry

from .base_mode import ESCAPE, Mode, ModeContext, ModeResult, VimMode


def is_named_key(key: str) -> bool:
    return len(key) > 2 and key.startswith("<") and key.endswith(">")


class InsertMode(Mode):
    mode = VimMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("vimcore.modes.insert")

    async def handle_key(self, key: str) -> ModeResult:
        context = self.context
        if key == ESCAPE:
            doc = context.document()
            cursor = doc.position_at(context.cursor)
            context.move_cursor(cursor.index - min(1, cursor.column), doc)
            return ModeResult(consumed=True, switch_to=VimMode.NORMAL, message="exit_insert")

        if is_named_key(key):
            self.logger.debug(f"insert::ignored key={key}")
            return ModeResult(consumed=False, status="ignored")

        selection = context.selection
        await context.edit([TextEdit(selection.start, selection.end, key)])
        context.move_cursor(selection.start + len(key))
        return ModeResult(consumed=True, status="typed")


__all__ = ["InsertMode", "is_named_key"]
