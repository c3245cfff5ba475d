"""Commands and the key bindings that reach them, grouped per mode."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, Optional, Sequence

from vimcore.runtime.telemetry import span

from .models import Binding, Command

_Slot = tuple[str, tuple[str, ...]]


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Two bindings in one mode share keys and an identical ``when`` clause."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(c.id for c in self.conflicts)
        super().__init__(f"Binding '{binding.id}' collides with {names}")


def _slot(binding: Binding) -> _Slot:
    return binding.mode, binding.sequence.tokens


def _collides(left: Binding, right: Binding) -> bool:
    # bindings guarded by different conditions may share keys; priority picks
    return left.id != right.id and dict(left.when_map) == dict(right.when_map)


class KeymapRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, Command] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[_Slot, list[str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        """Counter bumped on every change; resolvers rebuild when it moves."""

        return self._revision

    def get_command(self, command_id: str) -> Command:
        command = self._commands.get(command_id)
        if command is None:
            raise KeyError(f"Command '{command_id}' is not registered")
        return command

    def get_binding(self, binding_id: str) -> Binding:
        binding = self._bindings.get(binding_id)
        if binding is None:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return binding

    def register_command(self, command: Command, *, replace: bool = False) -> Command:
        if command.id in self._commands and not replace:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command
        self._revision += 1
        return command

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts whatever it collides with."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            self._require_command(binding, handle)
            conflicts = self.detect_conflicts(binding)
            previous = self._bindings.get(binding.id)
            if not replace:
                if conflicts:
                    handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                    raise KeymapConflictError(binding, conflicts)
                if previous is not None:
                    raise ValueError(f"Binding id '{binding.id}' already registered")

            for stale in conflicts:
                self._drop(stale)
            if previous is not None:
                self._drop(previous)
            self._store(binding)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is not None:
            self._drop(binding)
        return binding

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            updated = replace(self.get_binding(binding_id), **changes)
            self._require_command(updated, handle)
            conflicts = self.detect_conflicts(updated)
            if conflicts:
                handle.add_metadata("conflicts", ",".join(c.id for c in conflicts))
                raise KeymapConflictError(updated, conflicts)
            self._drop(self._bindings[binding_id])
            self._store(updated)
            return updated

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _ in self._slots})),
        )

    def detect_conflicts(
        self, binding: Binding, *, ignore: Sequence[str] | None = None
    ) -> list[Binding]:
        ignored = set(ignore or ())
        return [
            self._bindings[other_id]
            for other_id in self._slots.get(_slot(binding), [])
            if other_id not in ignored and _collides(binding, self._bindings[other_id])
        ]

    def _require_command(self, binding: Binding, handle) -> None:
        if binding.command_id not in self._commands:
            handle.add_metadata("missing_command", binding.command_id)
            raise KeyError(
                f"Binding '{binding.id}' references unknown command '{binding.command_id}'"
            )

    def _store(self, binding: Binding) -> None:
        self._bindings[binding.id] = binding
        self._slots.setdefault(_slot(binding), []).append(binding.id)
        self._revision += 1

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = _slot(binding)
        ids = self._slots.get(slot, [])
        if binding.id in ids:
            ids.remove(binding.id)
        if not ids:
            self._slots.pop(slot, None)
        self._revision += 1


__all__ = [
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
]
