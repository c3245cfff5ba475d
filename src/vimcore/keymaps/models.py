"""Dataclasses describing key bindings and the commands they resolve to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of key tokens (``("g", "g")``)."""

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens or not all(self.tokens):
            raise ValueError("KeySequence requires non-empty tokens")

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(key for key in keys if key))

    @classmethod
    def parse(cls, keys: str) -> "KeySequence":
        """``"gg"`` -> ``("g", "g")``; ``"<esc>"`` stays a single token."""

        if keys.startswith("<") and keys.endswith(">") and len(keys) > 2:
            return cls((keys,))
        return cls(tuple(keys))

    def __len__(self) -> int:
        return len(self.tokens)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag condition gating a binding (``count_pending``, ``!x``)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


class CommandKind(str, Enum):
    COUNT = "count"
    MOTION = "motion"
    FIND = "find"
    PENDING = "pending"
    CHANGE_MODE = "change_mode"
    OPERATOR = "operator"
    INSTANT = "instant"
    OBJECT = "object"


@dataclass(frozen=True, slots=True)
class Command:
    """What a binding does once its keys are complete.

    ``name`` is the motion/operator/instant identifier handed to the
    action layer (``"w"``, ``"gg"``, ``"d"``); for ``PENDING`` commands it
    names the pseudo-mode awaiting one more key. ``default_count`` applies
    when no count was typed (``G`` and ``%`` use 0).
    """

    id: str
    kind: CommandKind
    name: str
    default_count: int = 1
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Command id cannot be empty")
        if not self.name:
            raise ValueError("Command name cannot be empty")
        object.__setattr__(self, "kind", CommandKind(self.kind))


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one mode with a command."""

    id: str
    mode: str
    sequence: KeySequence
    command_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        normalized_when = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized_when)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return " ".join(self.sequence.tokens)


__all__ = [
    "Binding",
    "Command",
    "CommandKind",
    "KeySequence",
    "WhenClause",
]
