"""Operator-pending mode: waits for the motion or object an operator acts on."""

from __future__ import annotations

from vimcore.actions.models import MotionAction, ObjectAction, OperatorCommand
from vimcore.actions.operators import apply_operator

from .base_mode import ESCAPE, ModeResult, ParsedMode, VimMode


class OperatorPendingMode(ParsedMode):
    mode = VimMode.OPERATOR_PENDING

    async def handle_key(self, key: str) -> ModeResult:
        if key == ESCAPE:
            return self.escape()

        action = self.parser.resolve(key, self.mode)
        if action is None:
            return self.pending()
        if not isinstance(action, (MotionAction, ObjectAction)):
            return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="ignored")

        state = self.parser.state
        operator = state.operator
        if operator is None:
            return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="ignored")

        result = await apply_operator(self.context, operator, action, state.register)
        if result.status != "abandoned":
            self.context.last_change = OperatorCommand(operator, action, state.register)
        return result


__all__ = ["OperatorPendingMode"]
