"""Resolved commands produced by the key parser."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from vimcore.buffer.registers import UNNAMED


@dataclass(frozen=True, slots=True)
class MotionAction:
    """Cursor motion such as ``w`` or ``f<char>``.

    ``char`` carries the argument of find and mark motions, ``target`` the
    absolute index of a quick-jump.
    """

    motion: str
    count: int = 1
    char: Optional[str] = None
    target: Optional[int] = None
    kind: Literal["motion"] = "motion"


@dataclass(frozen=True, slots=True)
class ChangeModeAction:
    mode: str
    count: int = 1
    kind: Literal["change_mode"] = "change_mode"


@dataclass(frozen=True, slots=True)
class OperatorAction:
    operator: str
    count: int = 1
    register: str = UNNAMED
    kind: Literal["operator"] = "operator"


@dataclass(frozen=True, slots=True)
class ObjectAction:
    """Text object; ``range`` is ``"a"`` (with delimiters) or ``"i"``."""

    range: str
    object: str
    count: int = 1
    kind: Literal["object"] = "object"

    @property
    def include_delimiters(self) -> bool:
        return self.range == "a"


@dataclass(frozen=True, slots=True)
class InstantAction:
    instant: str
    count: int = 1
    register: str = UNNAMED
    char: Optional[str] = None
    kind: Literal["instant"] = "instant"


@dataclass(frozen=True, slots=True)
class ReplaceAction:
    char: str
    count: int = 1
    kind: Literal["replace"] = "replace"


Action = Union[
    MotionAction,
    ChangeModeAction,
    OperatorAction,
    ObjectAction,
    InstantAction,
    ReplaceAction,
]


@dataclass(frozen=True, slots=True)
class OperatorCommand:
    """Operator applied to a motion or object, remembered for ``.``."""

    operator: str
    target: Union[MotionAction, ObjectAction]
    register: str = UNNAMED
    kind: Literal["operator_command"] = "operator_command"


RepeatableChange = Union[InstantAction, ReplaceAction, OperatorCommand]


__all__ = [
    "Action",
    "ChangeModeAction",
    "InstantAction",
    "MotionAction",
    "ObjectAction",
    "OperatorAction",
    "OperatorCommand",
    "ReplaceAction",
    "RepeatableChange",
]
