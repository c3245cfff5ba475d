"""Base classes and shared state for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence

from vimcore.buffer import (
    HostOperationError,
    MarkStore,
    RegisterStore,
    Selection,
    TextDocument,
    TextEdit,
    TextHost,
)
from vimcore.motions import JumpIndex, LastFind
from vimcore.runtime.config import EngineConfig

if TYPE_CHECKING:  # pragma: no cover
    from vimcore.actions.models import RepeatableChange

    from .parser import CommandParser

ESCAPE = "<esc>"


class VimMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    SELECT = "select"
    REPLACE = "replace"
    OPERATOR_PENDING = "operator_pending"
    JUMP = "jump"

    @property
    def label(self) -> str:
        return _MODE_LABELS.get(self, f"-- {self.value.upper()} --")


_MODE_LABELS = {
    VimMode.NORMAL: "-- NORMAL --",
    VimMode.INSERT: "-- INSERT --",
    VimMode.VISUAL: "-- VISUAL --",
    VimMode.OPERATOR_PENDING: "-- NORMAL -- (o)",
    VimMode.JUMP: "-- JUMP --",
}


@dataclass(slots=True)
class ModeResult:
    """Outcome of one key.

    ``switch_to`` requests a mode transition; ``reset`` clears counts,
    pending operators and pseudo-modes (with or without a switch).
    """

    consumed: bool
    switch_to: Optional[VimMode] = None
    reset: bool = True
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting the engine publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Session services every mode and action can reach."""

    host: TextHost
    registers: RegisterStore
    marks: MarkStore
    bus: ModeBus
    config: EngineConfig
    jumps: JumpIndex
    last_find: Optional[LastFind] = None
    last_change: Optional["RepeatableChange"] = None
    extras: Dict[str, object] = field(default_factory=dict)

    def document(self) -> TextDocument:
        return TextDocument(self.host.get_text())

    @property
    def selection(self) -> Selection:
        return self.host.selection

    @property
    def cursor(self) -> int:
        return self.host.selection.start

    def move_cursor(self, index: int, document: Optional[TextDocument] = None) -> None:
        doc = document or self.document()
        self.host.set_selection(Selection.caret(doc.clamp_index(index)))

    def collapse_to_active(self) -> None:
        self.host.set_selection(Selection.caret(self.host.selection.active))

    async def edit(self, edits: Sequence[TextEdit]) -> None:
        if not await self.host.apply_edits(list(edits)):
            raise HostOperationError("Host rejected the edit", edits=edits)


class Mode:
    """Base class every concrete mode inherits from."""

    mode: VimMode = VimMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def name(self) -> str:
        return self.mode.value

    def on_enter(self, previous: Optional[VimMode]) -> None:  # pragma: no cover
        del previous

    def on_exit(self, next_mode: Optional[VimMode]) -> None:  # pragma: no cover
        del next_mode

    async def handle_key(self, key: str) -> ModeResult:  # pragma: no cover
        raise NotImplementedError


class ParsedMode(Mode):
    """Mode whose keys are folded into commands by the shared parser."""

    def __init__(self, context: ModeContext, *, parser: "CommandParser") -> None:
        super().__init__(context)
        self.parser = parser

    def pending(self) -> ModeResult:
        return ModeResult(consumed=True, reset=False, status="pending")

    def escape(self) -> ModeResult:
        self.context.collapse_to_active()
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL, message="escape")


__all__ = [
    "ESCAPE",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "ParsedMode",
    "VimMode",
]
