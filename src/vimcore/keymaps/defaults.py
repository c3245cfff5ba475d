"""Built-in command set and the default bindings for each mode."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .models import Binding, Command, CommandKind, KeySequence
from .registry import KeymapRegistry

NORMAL = "normal"
VISUAL = "visual"
OPERATOR_PENDING = "operator_pending"
COMMAND_MODES = (NORMAL, VISUAL, OPERATOR_PENDING)

COUNT_PENDING = "count_pending"

_KEY_NAMES = {"\n": "enter"}

MOTION_KEYS = "0wWeEhjkl$^bBG-\n+_;,%"
FIND_KEYS = "fFtT"
PENDING_KEYS = "rmQ\"'`"
CHANGE_MODE_KEYS = "iIaAoOvV"
OPERATOR_KEYS = "cdy"
NORMAL_INSTANT_KEYS = "upPxXCDYSs."
VISUAL_INSTANT_KEYS = "dcCRSsxuUyY"
OBJECT_KEYS = "ia"

_UNSPECIFIED_COUNT = {"G", "gg", "%"}

_DESCRIPTIONS = {
    "motion.h": "Left",
    "motion.l": "Right",
    "motion.j": "Down",
    "motion.k": "Up",
    "motion.w": "Next word start",
    "motion.W": "Next WORD start",
    "motion.e": "Word end",
    "motion.E": "WORD end",
    "motion.b": "Previous word start",
    "motion.B": "Previous WORD start",
    "motion.0": "Line start",
    "motion.^": "First non-blank",
    "motion.$": "Line end",
    "motion.G": "Last line or line N",
    "motion.gg": "First line or line N",
    "motion.%": "Matching bracket or N percent of the file",
    "motion.;": "Repeat last find",
    "motion.,": "Repeat last find backwards",
    "operator.d": "Delete",
    "operator.c": "Change",
    "operator.y": "Yank",
    "instant.p": "Paste after",
    "instant.P": "Paste before",
    "instant.u": "Undo",
    "instant..": "Repeat last change",
}


def _key_name(key: str) -> str:
    return _KEY_NAMES.get(key, key)


def _command(kind: CommandKind, name: str, *, default_count: int = 1) -> Command:
    command_id = f"{kind.value}.{_key_name(name)}"
    return Command(
        id=command_id,
        kind=kind,
        name=name,
        default_count=default_count,
        description=_DESCRIPTIONS.get(command_id, ""),
    )


def _build_commands() -> tuple[Command, ...]:
    commands: list[Command] = []
    commands.extend(_command(CommandKind.COUNT, digit) for digit in "0123456789")
    for motion in [*MOTION_KEYS, "gg"]:
        default = 0 if motion in _UNSPECIFIED_COUNT else 1
        commands.append(_command(CommandKind.MOTION, motion, default_count=default))
    commands.extend(_command(CommandKind.FIND, key) for key in FIND_KEYS)
    commands.extend(_command(CommandKind.PENDING, key) for key in PENDING_KEYS)
    commands.extend(_command(CommandKind.CHANGE_MODE, key) for key in [*CHANGE_MODE_KEYS, "gI"])
    commands.extend(_command(CommandKind.OPERATOR, key) for key in OPERATOR_KEYS)
    instants = dict.fromkeys(NORMAL_INSTANT_KEYS + VISUAL_INSTANT_KEYS)
    commands.extend(_command(CommandKind.INSTANT, key) for key in instants)
    commands.extend(_command(CommandKind.OBJECT, key) for key in OBJECT_KEYS)
    return tuple(commands)


DEFAULT_COMMANDS: tuple[Command, ...] = _build_commands()
_COMMANDS_BY_ID = {command.id: command for command in DEFAULT_COMMANDS}


def _bind(mode: str, kind: CommandKind, keys: str, *, when: tuple[str, ...] = ()) -> Binding:
    command = _COMMANDS_BY_ID[f"{kind.value}.{_key_name(keys)}"]
    return Binding(
        id=f"{mode}.{command.id}",
        mode=mode,
        sequence=KeySequence.parse(keys),
        command_id=command.id,
        description=command.description,
        when=when,  # type: ignore[arg-type]
    )


def _shared_bindings(mode: str) -> list[Binding]:
    bindings = [
        _bind(mode, CommandKind.COUNT, digit) for digit in "123456789"
    ]
    bindings.append(_bind(mode, CommandKind.COUNT, "0", when=(COUNT_PENDING,)))
    for motion in MOTION_KEYS:
        when = (f"!{COUNT_PENDING}",) if motion == "0" else ()
        bindings.append(_bind(mode, CommandKind.MOTION, motion, when=when))
    bindings.append(_bind(mode, CommandKind.MOTION, "gg"))
    bindings.extend(_bind(mode, CommandKind.FIND, key) for key in FIND_KEYS)
    bindings.extend(_bind(mode, CommandKind.PENDING, key) for key in PENDING_KEYS)
    return bindings


def _build_bindings() -> tuple[Binding, ...]:
    bindings: list[Binding] = []

    bindings.extend(_shared_bindings(NORMAL))
    bindings.extend(_bind(NORMAL, CommandKind.CHANGE_MODE, key) for key in CHANGE_MODE_KEYS)
    bindings.append(_bind(NORMAL, CommandKind.CHANGE_MODE, "gI"))
    bindings.extend(_bind(NORMAL, CommandKind.OPERATOR, key) for key in OPERATOR_KEYS)
    bindings.extend(_bind(NORMAL, CommandKind.INSTANT, key) for key in NORMAL_INSTANT_KEYS)

    bindings.extend(_shared_bindings(VISUAL))
    bindings.extend(_bind(VISUAL, CommandKind.INSTANT, key) for key in VISUAL_INSTANT_KEYS)
    bindings.extend(_bind(VISUAL, CommandKind.OBJECT, key) for key in OBJECT_KEYS)

    bindings.extend(_shared_bindings(OPERATOR_PENDING))
    bindings.extend(_bind(OPERATOR_PENDING, CommandKind.OBJECT, key) for key in OBJECT_KEYS)
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _build_bindings()


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_commands: Sequence[str] | None = None,
    exclude_commands: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register the built-in commands and bindings for every command mode.

    Bindings whose command was filtered out are skipped. ``per_mode_overrides``
    replace any binding they collide with.
    """

    allowed_commands = _build_filters(include_commands, exclude_commands)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    registered: set[str] = set()
    for command in DEFAULT_COMMANDS:
        if _selected(command.id, allowed_commands):
            registry.register_command(command, replace=replace)
            registered.add(command.id)

    for binding in DEFAULT_BINDINGS:
        if binding.command_id not in registered:
            continue
        if _selected(binding.id, allowed_bindings):
            registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)

    for mode, bindings in (per_mode_overrides or {}).items():
        for binding in bindings:
            if binding.mode != mode:
                raise ValueError(
                    f"Override binding '{binding.id}' must target mode '{mode}'"
                )
            registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    return include_set, set(exclude or ())


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = [
    "COMMAND_MODES",
    "COUNT_PENDING",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "load_default_keymaps",
]
