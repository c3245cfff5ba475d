"""Modal (Vim-style) command engine driving a host text buffer."""

from .session import Session, normalize_key, split_keys
from .buffer import Buffer, Selection, TextEdit, TextHost
from .modes import VimMode
from .runtime import EngineConfig

__all__ = [
    "Buffer",
    "EngineConfig",
    "Selection",
    "Session",
    "TextEdit",
    "TextHost",
    "VimMode",
    "normalize_key",
    "split_keys",
]

__version__ = "0.1.0"
