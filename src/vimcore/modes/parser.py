"""Key-at-a-time command parser.

``CommandParser.resolve`` folds one key into the pending state and either
returns ``None`` (more keys needed, or the key was rejected) or a complete
``Action``. Bindings come from the keymap resolver; keys that complete a
pseudo-mode (``f<char>``, ``"<reg>``, ``i<object>``, ...) are handled here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from vimcore.actions.models import (
    Action,
    ChangeModeAction,
    InstantAction,
    MotionAction,
    ObjectAction,
    OperatorAction,
    ReplaceAction,
)
from vimcore.buffer.registers import UNNAMED
from vimcore.keymaps import COUNT_PENDING, Command, CommandKind, KeymapResolver
from vimcore.motions import OBJECT_KEYS, JumpOutcome, LastFind
from vimcore.runtime import telemetry

from .base_mode import ModeContext, VimMode


class PendingKind(str, Enum):
    PREFIX = "prefix"
    FIND = "find"
    REPLACE = "replace"
    REGISTER = "register"
    MARK_SET = "mark_set"
    MARK_JUMP = "mark_jump"
    OBJECT = "object"
    JUMP_SEARCH = "jump_search"
    JUMP_LABEL = "jump_label"


_PENDING_BY_KEY = {
    "r": PendingKind.REPLACE,
    '"': PendingKind.REGISTER,
    "m": PendingKind.MARK_SET,
    "`": PendingKind.MARK_JUMP,
    "'": PendingKind.MARK_JUMP,
    "Q": PendingKind.JUMP_SEARCH,
}

_SINGLE_CHARACTER = frozenset(
    {PendingKind.REGISTER, PendingKind.MARK_SET, PendingKind.MARK_JUMP}
)


@dataclass(slots=True)
class ParserState:
    """Transient input state, discarded on every reset."""

    entered_count: str = ""
    operator: Optional[str] = None
    operator_count: str = ""
    register: str = UNNAMED
    pending: Optional[PendingKind] = None
    pending_key: Optional[str] = None
    prefix: list[str] = field(default_factory=list)
    typed: str = ""


class CommandParser:
    def __init__(
        self,
        context: ModeContext,
        resolver: KeymapResolver,
        *,
        on_reset: Optional[Callable[[], None]] = None,
    ) -> None:
        self.context = context
        self.resolver = resolver
        self.on_reset = on_reset
        self.state = ParserState()
        self.logger = telemetry.get_logger("vimcore.parser")

    @property
    def pending(self) -> Optional[PendingKind]:
        return self.state.pending

    def reset(self) -> None:
        had_labels = self.context.jumps.active
        self.state = ParserState()
        self.context.jumps.clear()
        if had_labels:
            self.context.bus.emit("jump.labels", {})

    def resolve(self, key: str, mode: VimMode) -> Optional[Action]:
        self.state.typed += key
        if self.state.pending is not None and self.state.pending is not PendingKind.PREFIX:
            return self._complete_pending(key, mode)

        if (
            mode is VimMode.OPERATOR_PENDING
            and not self.state.prefix
            and key == self.state.operator
        ):
            return MotionAction("line", count=self._motion_count(1, mode))

        tokens = (*self.state.prefix, key)
        result = self.resolver.resolve(mode.value, tokens, context=self._flags())
        if result.status == "pending":
            self.state.prefix = list(tokens)
            self.state.pending = PendingKind.PREFIX
            return None

        self.state.prefix = []
        self.state.pending = None
        if result.match is None:
            self._reject(key, mode)
            return None
        return self._from_command(result.match.command, mode)

    def _flags(self) -> dict[str, bool]:
        return {COUNT_PENDING: bool(self.state.entered_count)}

    def _count(self) -> int:
        return int(self.state.entered_count or "1")

    def _motion_count(self, default: int, mode: VimMode) -> int:
        entered = self.state.entered_count
        if mode is VimMode.OPERATOR_PENDING:
            operator = self.state.operator_count
            if not entered and not operator:
                return default
            return int(entered or "1") * int(operator or "1")
        return int(entered) if entered else default

    def _from_command(self, command: Command, mode: VimMode) -> Optional[Action]:
        kind = command.kind
        if kind is CommandKind.COUNT:
            self.state.entered_count += command.name
            return None
        if kind is CommandKind.MOTION:
            return MotionAction(
                command.name, count=self._motion_count(command.default_count, mode)
            )
        if kind is CommandKind.FIND:
            self._await(PendingKind.FIND, command.name)
            return None
        if kind is CommandKind.PENDING:
            self._await(_PENDING_BY_KEY[command.name], command.name)
            return None
        if kind is CommandKind.OBJECT:
            self._await(PendingKind.OBJECT, command.name)
            return None
        if kind is CommandKind.CHANGE_MODE:
            return ChangeModeAction(command.name, count=self._count())
        if kind is CommandKind.OPERATOR:
            self.state.operator = command.name
            self.state.operator_count = self.state.entered_count
            self.state.entered_count = ""
            return OperatorAction(
                command.name,
                count=int(self.state.operator_count or "1"),
                register=self.state.register,
            )
        if kind is CommandKind.INSTANT:
            return InstantAction(
                command.name, count=self._count(), register=self.state.register
            )
        raise ValueError(f"Unhandled command kind '{kind}'")

    def _await(self, kind: PendingKind, key: str) -> None:
        self.state.pending = kind
        self.state.pending_key = key

    def _complete_pending(self, key: str, mode: VimMode) -> Optional[Action]:
        kind = self.state.pending
        argument = self.state.pending_key or ""
        self.state.pending = None
        self.state.pending_key = None

        if kind is PendingKind.FIND:
            self.context.last_find = LastFind(argument, key)
            return MotionAction(argument, count=self._motion_count(1, mode), char=key)
        if kind is PendingKind.REPLACE:
            return ReplaceAction(key, count=self._count())
        if kind in _SINGLE_CHARACTER and len(key) != 1:
            self._reject(key, mode)
            return None
        if kind is PendingKind.REGISTER:
            self.state.register = key
            return None
        if kind is PendingKind.MARK_SET:
            return InstantAction("m", count=1, register=self.state.register, char=key)
        if kind is PendingKind.MARK_JUMP:
            return MotionAction(argument, count=1, char=key)
        if kind is PendingKind.OBJECT:
            if len(key) == 1 and key in OBJECT_KEYS:
                return ObjectAction(argument, key, count=self._count())
            self._reject(key, mode)
            return None
        if kind is PendingKind.JUMP_SEARCH:
            outcome = self.context.jumps.start(key, self.context.host.get_text())
            return self._after_jump(outcome, key, mode)
        if kind is PendingKind.JUMP_LABEL:
            return self._after_jump(self.context.jumps.advance(key), key, mode)
        raise ValueError(f"Unhandled pending state '{kind}'")

    def _after_jump(
        self, outcome: JumpOutcome, key: str, mode: VimMode
    ) -> Optional[Action]:
        if outcome.status == "resolved":
            self.context.bus.emit("jump.labels", {})
            return MotionAction("jump", count=1, target=outcome.target)
        if outcome.status == "abort":
            self._reject(key, mode)
            return None
        self.state.pending = PendingKind.JUMP_LABEL
        self.context.bus.emit("jump.labels", dict(outcome.groups))
        return None

    def _reject(self, key: str, mode: VimMode) -> None:
        self.logger.debug(f"parser::reject key={key!r} mode={mode.value}")
        if self.on_reset is not None:
            self.on_reset()
        else:
            self.reset()


__all__ = ["CommandParser", "ParserState", "PendingKind"]
