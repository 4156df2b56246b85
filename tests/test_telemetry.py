from __future__ import annotations

import pytest

from textpad.runtime import telemetry
from textpad.runtime.telemetry import TelemetrySettings, settings_from_env


def test_settings_default_to_silent_info() -> None:
    settings = settings_from_env({})

    assert settings == TelemetrySettings()
    assert settings.console is False
    assert settings.log_file == ""


def test_settings_read_textpad_variables() -> None:
    settings = settings_from_env(
        {
            "TEXTPAD_LOG_LEVEL": "DEBUG",
            "TEXTPAD_LOG_FILE": "trace.log",
            "TEXTPAD_LOG_CONSOLE": "yes",
            "TEXTPAD_NO_COLOR": "1",
            "TEXTPAD_LOG_JSON": "true",
        }
    )

    assert settings.level == "debug"
    assert settings.log_file == "trace.log"
    assert settings.console is True
    assert settings.colored is False
    assert settings.json is True


def test_cli_overrides_win_over_environment() -> None:
    base = settings_from_env({"TEXTPAD_LOG_FILE": "env.log", "TEXTPAD_LOG_LEVEL": "error"})

    merged = base.with_overrides(log_file="cli.log", level=None)

    assert merged.log_file == "cli.log"
    assert merged.level == "error"


def test_settings_reject_unknown_level() -> None:
    with pytest.raises(ValueError):
        TelemetrySettings(level="trace")


def test_configure_from_options_returns_applied_settings(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("TEXTPAD_LOG_FILE", raising=False)
    target = tmp_path / "textpad.log"

    try:
        settings = telemetry.configure_from_options(log_file=str(target), level="debug")
        assert settings.log_file == str(target)
        assert settings.level == "debug"
    finally:
        telemetry.configure(TelemetrySettings())


def test_span_reraises_block_errors() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("test::span", component=True, metadata={"k": 1}) as handle:
            handle.add_metadata("step", "before")
            raise KeyError("boom")


def test_unknown_env_level_falls_back_to_info() -> None:
    assert settings_from_env({"TEXTPAD_LOG_LEVEL": "verbose"}).level == "info"
