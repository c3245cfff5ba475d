"""Declarative keymap registry, resolver and default bindings."""

from .models import Binding, Command, CommandKind, KeySequence, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import (
    COMMAND_MODES,
    COUNT_PENDING,
    DEFAULT_BINDINGS,
    DEFAULT_COMMANDS,
    load_default_keymaps,
)

__all__ = [
    "Binding",
    "COMMAND_MODES",
    "COUNT_PENDING",
    "Command",
    "CommandKind",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "KeySequence",
    "KeymapConflictError",
    "KeymapRegistry",
    "KeymapResolver",
    "RegistryStats",
    "ResolutionMatch",
    "ResolutionResult",
    "WhenClause",
    "load_default_keymaps",
]
