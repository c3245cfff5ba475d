from __future__ import annotations

from vimcore.keymaps import (
    Binding,
    Command,
    CommandKind,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
    WhenClause,
    load_default_keymaps,
)


def make_command(command_id: str, *, name: str = "gg") -> Command:
    return Command(id=command_id, kind=CommandKind.MOTION, name=name)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("g", "g"),
    command_id: str = "motion.gg",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        command_id=command_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    command_ids = {binding.command_id for binding in bindings}
    for command_id in command_ids:
        registry.register_command(make_command(command_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("normal.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.command.id == "motion.gg"
    assert result.consumed == 2


def test_resolver_reports_pending_for_prefix() -> None:
    binding = make_binding("normal.gg")
    registry = build_registry([binding])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.next_expected == ("g",)


def test_resolver_misses_unknown_keys() -> None:
    registry = build_registry([make_binding("normal.gg")])
    resolver = KeymapResolver(registry)

    assert resolver.resolve("normal", ("z",)).status == "miss"
    assert resolver.resolve("visual", ("g", "g")).status == "miss"


def test_resolver_honors_when_clauses() -> None:
    gating = make_binding(
        "counting.gg",
        when=(WhenClause("count_pending"),),
        command_id="motion.counting",
    )
    registry = build_registry([gating])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("g", "g"), context={})
    assert miss.status == "miss"

    hit = resolver.resolve("normal", ("g", "g"), context={"count_pending": True})
    assert hit.status == "match"
    assert hit.match is not None
    assert hit.match.binding.id == gating.id


def test_resolver_prefers_higher_priority() -> None:
    low = make_binding("low", when=(WhenClause("a"),), command_id="motion.low")
    high = make_binding(
        "high",
        when=(WhenClause("a"), WhenClause("b")),
        command_id="motion.high",
        priority=5,
    )
    registry = build_registry([low, high])
    resolver = KeymapResolver(registry)

    result = resolver.resolve("normal", ("g", "g"), context={"a": True, "b": True})

    assert result.match is not None
    assert result.match.binding.id == "high"


def test_resolver_cache_refreshes_on_revision() -> None:
    registry = build_registry([])
    resolver = KeymapResolver(registry)

    miss = resolver.resolve("normal", ("x",))
    assert miss.status == "miss"

    new_binding = make_binding("normal.x", keys=("x",), command_id="instant.x")
    registry.register_command(make_command("instant.x", name="x"))
    registry.register_binding(new_binding)

    match = resolver.resolve("normal", ("x",))
    assert match.status == "match"
    assert match.match is not None
    assert match.match.binding.id == new_binding.id


def test_default_zero_depends_on_count_flag() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    motion = resolver.resolve("normal", ("0",), context={"count_pending": False})
    digit = resolver.resolve("normal", ("0",), context={"count_pending": True})

    assert motion.match is not None and motion.match.command.kind is CommandKind.MOTION
    assert digit.match is not None and digit.match.command.kind is CommandKind.COUNT


def test_default_g_prefix_is_pending() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)

    pending = resolver.resolve("normal", ("g",))
    insert = resolver.resolve("normal", ("g", "I"))

    assert pending.status == "pending"
    assert set(pending.next_expected) == {"I", "g"}
    assert insert.match is not None
    assert insert.match.command.id == "change_mode.gI"
