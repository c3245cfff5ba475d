"""Text model, host boundary, registers, marks and the in-memory buffer."""

from .buffer import Buffer, Transaction
from .document import TextDocument, TextLine
from .host import (
    BufferValidationError,
    HostOperationError,
    TextChange,
    TextEdit,
    TextHost,
)
from .marks import MarkStore
from .position import Position
from .registers import UNNAMED, Register, RegisterStore
from .state import Cursor, Selection
from .undo import UndoEntry, UndoTimeline

__all__ = [
    "Buffer",
    "BufferValidationError",
    "Cursor",
    "HostOperationError",
    "MarkStore",
    "Position",
    "Register",
    "RegisterStore",
    "Selection",
    "TextChange",
    "TextDocument",
    "TextEdit",
    "TextHost",
    "TextLine",
    "Transaction",
    "UNNAMED",
    "UndoEntry",
    "UndoTimeline",
]
