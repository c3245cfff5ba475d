"""Motion, text-object and quick-jump calculators."""

from .jump import JumpIndex, JumpOutcome, assign_labels
from .motions import (
    MOTIONS,
    LastFind,
    MotionRange,
    calculate_motion,
    match_bracket,
    resolve_motion,
)
from .text_objects import OBJECT_KEYS, calculate_object
from .words import Word, WordType, big_word_at, word_at

__all__ = [
    "JumpIndex",
    "JumpOutcome",
    "LastFind",
    "MOTIONS",
    "MotionRange",
    "OBJECT_KEYS",
    "Word",
    "WordType",
    "assign_labels",
    "big_word_at",
    "calculate_motion",
    "calculate_object",
    "match_bracket",
    "resolve_motion",
    "word_at",
]
