import pytest

from vimcore.keymaps import (
    Binding,
    Command,
    CommandKind,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)


def make_command(command_id: str = "motion.gg") -> Command:
    return Command(id=command_id, kind=CommandKind.MOTION, name="gg")


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    command_id: str = "motion.gg",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        command_id=command_id,
        when=when,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_requires_known_command() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())

    registry.register_binding(make_binding(binding_id="normal.gg"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())

    counting = make_binding(
        binding_id="counting",
        when=(WhenClause("count_pending"),),
    )
    idle = make_binding(
        binding_id="idle",
        when=(WhenClause.parse("!count_pending"),),
    )

    registry.register_binding(counting)
    registry.register_binding(idle)

    assert registry.stats().binding_count == 2


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_update_binding_changes_sequence() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    registry.register_binding(make_binding(binding_id="binding"))

    updated = registry.update_binding(
        "binding", sequence=make_sequence("g", "o"), description="go"
    )

    assert updated.sequence.tokens == ("g", "o")
    assert updated.description == "go"


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0


def test_load_default_keymaps_covers_every_command_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    modes = {binding.mode for binding in registry.iter_bindings()}
    assert modes == {"normal", "visual", "operator_pending"}
    assert registry.get_binding("normal.operator.d").command_id == "operator.d"
    assert registry.get_command("motion.G").default_count == 0
    assert registry.get_command("motion.%").default_count == 0
    assert registry.get_command("motion.w").default_count == 1


def test_load_default_keymaps_zero_is_gated_by_count() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    as_motion = registry.get_binding("normal.motion.0")
    as_digit = registry.get_binding("normal.count.0")
    assert dict(as_motion.when_map) == {"count_pending": False}
    assert dict(as_digit.when_map) == {"count_pending": True}


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_commands=("change_mode.i",),
        include_bindings=("normal.change_mode.i",),
    )

    assert registry.stats().binding_count == 1
    assert registry.get_binding("normal.change_mode.i").command_id == "change_mode.i"


def test_load_default_keymaps_exclude_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_commands=("operator.y",))

    assert all(b.command_id != "operator.y" for b in registry.iter_bindings())


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="normal.change_mode.i",
        mode="normal",
        sequence=KeySequence.from_strings("<insert>"),
        command_id="change_mode.i",
    )

    load_default_keymaps(
        registry,
        per_mode_overrides={"normal": (custom_binding,)},
    )

    binding = registry.get_binding("normal.change_mode.i")
    assert binding.sequence.tokens == ("<insert>",)


def test_load_default_keymaps_rejects_override_for_other_mode() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="visual.change_mode.i",
        mode="visual",
        sequence=KeySequence.from_strings("<insert>"),
        command_id="change_mode.i",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(
            registry,
            per_mode_overrides={"normal": (custom_binding,)},
        )


def test_registry_revision_advances_on_change() -> None:
    registry = KeymapRegistry()
    registry.register_command(make_command())
    before = registry.revision()

    registry.register_binding(make_binding(binding_id="binding"))

    assert registry.revision() > before
