"""Jump mode: narrows labelled quick-jump candidates down to one target."""

from __future__ import annotations

from vimcore.actions.models import MotionAction

from .base_mode import ESCAPE, ModeResult, ParsedMode, VimMode
from .parser import PendingKind


class JumpMode(ParsedMode):
    mode = VimMode.JUMP

    async def handle_key(self, key: str) -> ModeResult:
        if key == ESCAPE:
            return self.escape()

        action = self.parser.resolve(key, self.mode)
        if isinstance(action, MotionAction) and action.target is not None:
            self.context.move_cursor(action.target)
            return ModeResult(consumed=True, switch_to=VimMode.NORMAL, message="jump")
        if self.parser.pending is PendingKind.JUMP_LABEL:
            return self.pending()
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="abandoned")


__all__ = ["JumpMode"]
