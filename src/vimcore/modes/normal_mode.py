"""Normal mode: motions, mode changes, operators and instants."""

from __future__ import annotations

from vimcore.actions.core import change_mode
from vimcore.actions.instants import UNREPEATABLE, replace_characters, run_instant
from vimcore.actions.models import (
    Action,
    ChangeModeAction,
    InstantAction,
    MotionAction,
    OperatorAction,
    ReplaceAction,
)
from vimcore.motions import resolve_motion
from vimcore.runtime import telemetry

from .base_mode import ESCAPE, ModeResult, ParsedMode, VimMode
from .parser import PendingKind


class NormalMode(ParsedMode):
    mode = VimMode.NORMAL

    async def handle_key(self, key: str) -> ModeResult:
        if key == ESCAPE:
            return self.escape()

        action = self.parser.resolve(key, self.mode)
        if action is None:
            if self.parser.pending is PendingKind.JUMP_LABEL:
                return ModeResult(
                    consumed=True, switch_to=VimMode.JUMP, reset=False, status="pending"
                )
            return self.pending()
        return await self.execute(action)

    async def execute(self, action: Action) -> ModeResult:
        if isinstance(action, MotionAction):
            return self._move(action)
        if isinstance(action, ChangeModeAction):
            return await change_mode(self.context, action)
        if isinstance(action, OperatorAction):
            return ModeResult(
                consumed=True,
                switch_to=VimMode.OPERATOR_PENDING,
                reset=False,
                message=action.operator,
            )
        if isinstance(action, InstantAction):
            if action.instant not in UNREPEATABLE:
                self.context.last_change = action
            return await run_instant(self.context, action)
        if isinstance(action, ReplaceAction):
            self.context.last_change = action
            return await replace_characters(self.context, action)

        telemetry.record_event(
            "normal.unexpected_action", level="warning", data={"kind": action.kind}
        )
        return ModeResult(consumed=False, switch_to=VimMode.NORMAL, status="ignored")

    def _move(self, action: MotionAction) -> ModeResult:
        context = self.context
        doc = context.document()
        motion = resolve_motion(
            doc, action, context.cursor, marks=context.marks, last_find=context.last_find
        )
        if motion is None:
            return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="abandoned")
        context.move_cursor(motion.end, doc)
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL)


__all__ = ["NormalMode"]
