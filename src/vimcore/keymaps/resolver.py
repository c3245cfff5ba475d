"""Key-sequence lookup for one mode at a time.

Each mode gets a prefix tree of its bindings. A tree is cached together with
the registry revision it was built from and rebuilt lazily after any change,
so the parser can resolve on every keystroke without re-scanning bindings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Literal, Mapping, Optional, Sequence

from vimcore.runtime.telemetry import span

from .models import Binding, Command
from .registry import KeymapRegistry

Status = Literal["match", "pending", "miss"]


@dataclass(slots=True)
class KeyNode:
    """Bindings ending at this key plus the keys that may follow it."""

    bindings: list[Binding] = field(default_factory=list)
    children: Dict[str, "KeyNode"] = field(default_factory=dict)

    def walk(self, tokens: Sequence[str]) -> tuple[Optional["KeyNode"], int]:
        node: Optional[KeyNode] = self
        depth = 0
        for token in tokens:
            assert node is not None
            node = node.children.get(token)
            if node is None:
                break
            depth += 1
        return node, depth


def build_tree(bindings: Iterable[Binding]) -> KeyNode:
    root = KeyNode()
    for binding in bindings:
        node = root
        for token in binding.sequence.tokens:
            node = node.children.setdefault(token, KeyNode())
        node.bindings.append(binding)
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    command: Command


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """``match`` when a binding is complete, ``pending`` on a strict prefix."""

    status: Status
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._trees: Dict[str, tuple[int, KeyNode]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        """Look ``tokens`` up in ``mode``.

        Bindings whose ``when`` clause fails against ``context`` are skipped,
        which turns a complete sequence into ``pending`` or ``miss``.
        """

        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": "".join(tokens)},
        ) as handle:
            node, depth = self._tree(mode).walk(tokens)
            result = self._classify(node, depth, context or {})
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._trees.clear()
        else:
            self._trees.pop(mode, None)

    def _tree(self, mode: str) -> KeyNode:
        revision = self._registry.revision()
        cached = self._trees.get(mode)
        if cached is None or cached[0] != revision:
            cached = (revision, build_tree(self._registry.iter_bindings(mode)))
            self._trees[mode] = cached
        return cached[1]

    def _classify(
        self, node: Optional[KeyNode], depth: int, flags: Mapping[str, bool]
    ) -> ResolutionResult:
        if node is None:
            return ResolutionResult(status="miss", consumed=depth)

        allowed = [binding for binding in node.bindings if binding.allows(flags)]
        if allowed:
            # highest priority wins, ties go to the lowest id
            binding = min(allowed, key=lambda b: (-b.priority, b.id))
            command = self._registry.get_command(binding.command_id)
            match = ResolutionMatch(binding=binding, command=command)
            return ResolutionResult(status="match", match=match, consumed=depth)

        if node.children:
            return ResolutionResult(
                status="pending", consumed=depth, next_expected=tuple(sorted(node.children))
            )
        return ResolutionResult(status="miss", consumed=depth)


__all__ = [
    "KeyNode",
    "KeymapResolver",
    "ResolutionMatch",
    "ResolutionResult",
    "build_tree",
]
