"""Visual mode: motions and objects extend the selection, instants act on it."""

from __future__ import annotations

from vimcore.actions.instants import replace_selection, run_visual_instant
from vimcore.actions.models import InstantAction, MotionAction, ObjectAction, ReplaceAction
from vimcore.buffer import Selection
from vimcore.motions import calculate_object, resolve_motion

from .base_mode import ESCAPE, ModeResult, ParsedMode, VimMode


class VisualMode(ParsedMode):
    mode = VimMode.VISUAL

    async def handle_key(self, key: str) -> ModeResult:
        if key == ESCAPE:
            return self.escape()

        action = self.parser.resolve(key, self.mode)
        if action is None:
            return self.pending()

        if isinstance(action, MotionAction):
            return self._extend(action)
        if isinstance(action, ObjectAction):
            return self._select_object(action)
        if isinstance(action, InstantAction):
            return await run_visual_instant(self.context, action)
        if isinstance(action, ReplaceAction):
            return await replace_selection(self.context, action)
        return ModeResult(consumed=False, status="ignored")

    def _extend(self, action: MotionAction) -> ModeResult:
        context = self.context
        selection = context.selection
        doc = context.document()
        motion = resolve_motion(
            doc,
            action,
            selection.active,
            marks=context.marks,
            last_find=context.last_find,
        )
        if motion is not None:
            end = motion.end + 1 if motion.inclusive else motion.end
            self._select(Selection(selection.anchor, doc.clamp_index(end)))
        return ModeResult(consumed=True, status="visual_select")

    def _select_object(self, action: ObjectAction) -> ModeResult:
        context = self.context
        selection = context.selection
        found = calculate_object(context.document(), action, selection.active)
        if found is not None:
            self._select(selection.union(found.start, found.end))
        return ModeResult(consumed=True, status="visual_select")

    def _select(self, selection: Selection) -> None:
        self.context.host.set_selection(selection)
        self.context.bus.emit(
            "visual.selection", {"anchor": selection.anchor, "active": selection.active}
        )


__all__ = ["VisualMode"]
