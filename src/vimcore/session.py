"""Editing session: the single entry point a host drives key by key."""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from vimcore.buffer import (
    HostOperationError,
    MarkStore,
    RegisterStore,
    Selection,
    TextChange,
    TextHost,
)
from vimcore.keymaps import KeymapRegistry
from vimcore.modes import ESCAPE, ModeBus, ModeContext, ModeManager, ModeResult, VimMode
from vimcore.motions import JumpIndex
from vimcore.runtime import EngineConfig, telemetry

_KEY_ALIASES = {
    "ESC": ESCAPE,
    "<Esc>": ESCAPE,
    "<ESC>": ESCAPE,
    "escape": ESCAPE,
    "ENTER": "\n",
    "RETURN": "\n",
    "<cr>": "\n",
    "<CR>": "\n",
    "<enter>": "\n",
}

_KEY_PATTERN = re.compile(r"<esc>|.", re.DOTALL)


def normalize_key(key: str) -> str:
    return _KEY_ALIASES.get(key, key)


def split_keys(keys: str) -> list[str]:
    """Split typed input into keys, keeping ``<esc>`` as one token."""

    return _KEY_PATTERN.findall(keys)


class Session:
    """Modal state for one host buffer.

    Registers, marks and the last change live for as long as the session;
    counts, pending operators and pseudo-modes are dropped on every reset.
    """

    def __init__(
        self,
        host: TextHost,
        *,
        config: Optional[EngineConfig] = None,
        keymap_registry: Optional[KeymapRegistry] = None,
        bus: Optional[ModeBus] = None,
    ) -> None:
        self.config = config or EngineConfig.from_env()
        self.context = ModeContext(
            host=host,
            registers=RegisterStore(),
            marks=MarkStore(),
            bus=bus or ModeBus(),
            config=self.config,
            jumps=JumpIndex(self.config.jump_labels),
        )
        self.manager = ModeManager(self.context, keymap_registry=keymap_registry)
        self.logger = telemetry.get_logger("vimcore.session")
        self._unsubscribe = host.subscribe_changes(self.notify_document_changed)

    @property
    def host(self) -> TextHost:
        return self.context.host

    @property
    def mode(self) -> VimMode:
        return self.manager.mode

    @property
    def registers(self) -> RegisterStore:
        return self.context.registers

    @property
    def marks(self) -> MarkStore:
        return self.context.marks

    @property
    def bus(self) -> ModeBus:
        return self.context.bus

    @property
    def typed(self) -> str:
        """Keys collected for the command in progress."""

        return self.manager.parser.state.typed

    async def process_key(self, key: str) -> ModeResult:
        """Resolve and execute one key.

        A host failure abandons the command and returns to Normal mode; it
        never propagates to the caller.
        """

        key = normalize_key(key)
        with telemetry.span(
            "session::key",
            logger_name="vimcore.session",
            metadata={"key": key, "mode": self.mode.value},
        ) as handle:
            try:
                result = await self.manager.dispatch(key)
            except HostOperationError as exc:
                handle.add_metadata("status", "host_error")
                telemetry.record_event(
                    "session.host_error",
                    level="error",
                    data={"key": key, "error": str(exc)},
                    logger_name="vimcore.session",
                )
                self.manager.set_mode(VimMode.NORMAL, reset=True)
                return ModeResult(consumed=True, status="error", message=str(exc))

            self.manager.clean_selection()
            handle.add_metadata("status", result.status)

        self.bus.emit("keys.entered", self.typed)
        return result

    async def feed(self, keys: str) -> list[ModeResult]:
        return [await self.process_key(key) for key in split_keys(keys)]

    def notify_selection_changed(self, selections: Sequence[Selection]) -> None:
        """Follow selection changes made outside the engine."""

        mode = self.mode
        if mode is VimMode.VISUAL and all(s.is_empty for s in selections):
            self.manager.set_mode(VimMode.NORMAL, reset=True)
        elif mode in (VimMode.NORMAL, VimMode.OPERATOR_PENDING) and any(
            not s.is_empty for s in selections
        ):
            self.manager.set_mode(VimMode.VISUAL, reset=True)
        self.manager.clean_selection()

    def notify_document_changed(self, changes: Iterable[TextChange]) -> None:
        self.marks.apply_changes(changes)

    def close(self) -> None:
        self._unsubscribe()


__all__ = ["Session", "normalize_key", "split_keys"]
