"""Environment-driven configuration shared by telemetry and the engine."""

from __future__ import annotations

import os
import string
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "VIMCORE_"

_TRUTHY = {"1", "true", "yes", "on"}


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Behaviour switches for a single editing session.

    ``jump_labels`` is the alphabet used to label quick-jump candidates,
    ``change_word_to_end`` makes ``cw``/``cW`` behave like ``ce``/``cE`` and
    ``open_line_copies_indent`` carries the current indentation onto lines
    opened with ``o``/``O``.
    """

    jump_labels: str = string.ascii_uppercase
    change_word_to_end: bool = True
    open_line_copies_indent: bool = True

    def __post_init__(self) -> None:
        labels = "".join(dict.fromkeys(self.jump_labels.upper()))
        if len(labels) < 2:
            raise ValueError("jump_labels needs at least two distinct characters")
        object.__setattr__(self, "jump_labels", labels)

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            jump_labels=env("JUMP_LABELS") or string.ascii_uppercase,
            change_word_to_end=env_flag("CHANGE_WORD_TO_END", True),
            open_line_copies_indent=env_flag("OPEN_LINE_COPIES_INDENT", True),
        )


__all__ = ["ENV_PREFIX", "EngineConfig", "env", "env_flag", "env_int"]
