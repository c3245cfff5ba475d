"""Named registers holding yanked and deleted text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional

UNNAMED = '"'


@dataclass(frozen=True, slots=True)
class Register:
    linewise: bool
    text: str

    def repeated(self, count: int) -> str:
        return self.text * max(1, count)


class RegisterStore:
    """Single-character keyed registers; writes always replace."""

    def __init__(self) -> None:
        self._registers: Dict[str, Register] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._registers

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._registers))

    def write(self, name: str, linewise: bool, text: str) -> Register:
        if len(name) != 1:
            raise ValueError(f"Register names are single characters, got {name!r}")
        register = Register(linewise=linewise, text=text)
        self._registers[name] = register
        return register

    def read(self, name: str = UNNAMED) -> Optional[Register]:
        return self._registers.get(name)

    def snapshot(self) -> Mapping[str, Register]:
        return dict(self._registers)


__all__ = ["Register", "RegisterStore", "UNNAMED"]
