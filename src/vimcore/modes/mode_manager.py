"""Mode manager owning the active mode, the key parser and transitions."""

from __future__ import annotations

from typing import Dict, Optional, Type

from vimcore.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from vimcore.runtime import telemetry

from .base_mode import Mode, ModeContext, ModeResult, ParsedMode, VimMode
from .insert_mode import InsertMode
from .jump_mode import JumpMode
from .normal_mode import NormalMode
from .operator_mode import OperatorPendingMode
from .parser import CommandParser
from .visual_mode import VisualMode

DEFAULT_MODES: tuple[Type[Mode], ...] = (
    NormalMode,
    InsertMode,
    VisualMode,
    OperatorPendingMode,
    JumpMode,
)


class ModeManager:
    """Owns active mode, handles transitions, and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self.logger = telemetry.get_logger("vimcore.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vimcore.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vimcore.keymaps"
        )
        self.parser = CommandParser(
            context, self.keymap_resolver, on_reset=self.reset_to_normal
        )
        self.context.extras.setdefault("mode_manager", self)
        self._modes: Dict[VimMode, Mode] = {}
        self._active: Optional[VimMode] = None
        for mode_cls in DEFAULT_MODES:
            self.register_mode(mode_cls)

    @property
    def mode(self) -> VimMode:
        return self._active or VimMode.NORMAL

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(self, mode_cls: Type[Mode]) -> Mode:
        if issubclass(mode_cls, ParsedMode):
            mode: Mode = mode_cls(self.context, parser=self.parser)
        else:
            mode = mode_cls(self.context)
        if mode.mode in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.mode] = mode
        if self._active is None:
            self._active = mode.mode
            mode.on_enter(None)
        return mode

    def set_mode(self, mode: VimMode, *, reset: bool = True) -> None:
        if reset:
            self.parser.reset()
        previous = self._active
        if previous is mode:
            return
        if previous is not None and previous in self._modes:
            self._modes[previous].on_exit(mode)
        self._active = mode
        handler = self._modes.get(mode)
        if handler is not None:
            handler.on_enter(previous)
        telemetry.record_event(
            "mode.switch",
            data={"mode": mode.value, "previous": previous.value if previous else None},
        )
        self.context.bus.emit("mode.changed", {"mode": mode, "label": mode.label})

    def reset_to_normal(self) -> None:
        self.set_mode(VimMode.NORMAL, reset=True)

    async def dispatch(self, key: str) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            self.reset_to_normal()
            return ModeResult(consumed=False, status="ignored")

        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key, "mode": mode.name},
        ):
            result = await mode.handle_key(key)

        if result.switch_to is not None:
            self.set_mode(result.switch_to, reset=result.reset)
        elif result.reset:
            self.parser.reset()
        return result

    def clean_selection(self) -> None:
        """Keep a Normal-mode caret on a character rather than past line end."""

        if self.mode not in (VimMode.NORMAL, VimMode.OPERATOR_PENDING):
            return
        selection = self.context.selection
        if not selection.is_empty:
            return
        doc = self.context.document()
        position = doc.position_at(selection.active)
        if position.column == 0:
            return
        if position.column >= doc.line(position.line).length:
            self.context.move_cursor(position.index - 1, doc)


__all__ = ["DEFAULT_MODES", "ModeManager"]
