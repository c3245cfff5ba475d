import pytest

from vimcore.runtime import EngineConfig, telemetry


def test_engine_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIMCORE_JUMP_LABELS", "asdf")
    monkeypatch.setenv("VIMCORE_CHANGE_WORD_TO_END", "off")

    config = EngineConfig.from_env()

    assert config.jump_labels == "ASDF"
    assert config.change_word_to_end is False
    assert config.open_line_copies_indent is True


def test_engine_config_rejects_single_label() -> None:
    with pytest.raises(ValueError):
        EngineConfig(jump_labels="aA")


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_loggers_are_cached_per_name() -> None:
    telemetry.configure(preset="development")

    assert telemetry.get_logger("vimcore.test") is telemetry.get_logger("vimcore.test")


def test_span_reraises_and_keeps_metadata() -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("test::span", component="tests", metadata={"n": 1}) as handle:
            handle.add_metadata("status", "running")
            assert handle.metadata == {"n": "1", "status": "running"}
            raise RuntimeError("boom")
