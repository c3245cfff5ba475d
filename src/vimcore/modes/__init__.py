"""Mode state machine, key parser and per-mode dispatch."""

from .base_mode import (
    ESCAPE,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    ParsedMode,
    VimMode,
)
from .parser import CommandParser, ParserState, PendingKind
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .operator_mode import OperatorPendingMode
from .jump_mode import JumpMode
from .mode_manager import DEFAULT_MODES, ModeManager

__all__ = [
    "CommandParser",
    "DEFAULT_MODES",
    "ESCAPE",
    "InsertMode",
    "JumpMode",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeManager",
    "ModeResult",
    "NormalMode",
    "OperatorPendingMode",
    "ParsedMode",
    "ParserState",
    "PendingKind",
    "VimMode",
]
