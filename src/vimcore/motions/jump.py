"""Label assignment for quick-jump (``Q``) search."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping, Optional, Sequence


@dataclass(frozen=True, slots=True)
class JumpOutcome:
    """Result of feeding a key to the jump index.

    ``status`` is ``"labels"`` while candidates remain ambiguous,
    ``"resolved"`` once ``target`` is known and ``"abort"`` when nothing
    matched.
    """

    status: Literal["labels", "resolved", "abort"]
    target: Optional[int] = None
    groups: Mapping[str, tuple[int, ...]] = field(default_factory=dict)


def assign_labels(indices: Sequence[int], labels: str) -> Dict[str, tuple[int, ...]]:
    """Deal ``indices`` round-robin onto ``labels``, dropping empty labels."""

    buckets: Dict[str, list[int]] = {label: [] for label in labels}
    for position, index in enumerate(indices):
        buckets[labels[position % len(labels)]].append(index)
    return {label: tuple(found) for label, found in buckets.items() if found}


class JumpIndex:
    def __init__(self, labels: str = string.ascii_uppercase) -> None:
        self.labels = labels.upper()
        self._groups: Optional[Dict[str, tuple[int, ...]]] = None

    @property
    def active(self) -> bool:
        return self._groups is not None

    @property
    def groups(self) -> Mapping[str, tuple[int, ...]]:
        return dict(self._groups or {})

    def start(self, search: str, text: str) -> JumpOutcome:
        """Collect case-insensitive matches of ``search`` in ``text``."""

        pattern = re.compile(re.escape(search), re.IGNORECASE)
        matches = [match.start() for match in pattern.finditer(text)]
        return self._settle(matches)

    def advance(self, label: str) -> JumpOutcome:
        """Narrow the candidates to the group labelled ``label``."""

        if self._groups is None:
            return JumpOutcome(status="abort")
        return self._settle(self._groups.get(label.upper(), ()))

    def clear(self) -> None:
        self._groups = None

    def _settle(self, matches: Sequence[int]) -> JumpOutcome:
        if not matches:
            self._groups = None
            return JumpOutcome(status="abort")
        if len(matches) == 1:
            self._groups = None
            return JumpOutcome(status="resolved", target=matches[0])
        self._groups = assign_labels(matches, self.labels)
        return JumpOutcome(status="labels", groups=dict(self._groups))


__all__ = ["JumpIndex", "JumpOutcome", "assign_labels"]
