"""Action values produced by the parser and the verbs that execute them.

Only the action models are re-exported here; the executors live in
``core``, ``operators`` and ``instants`` and are imported from there.
"""

from .models import (
    Action,
    ChangeModeAction,
    InstantAction,
    MotionAction,
    ObjectAction,
    OperatorAction,
    OperatorCommand,
    ReplaceAction,
    RepeatableChange,
)

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
