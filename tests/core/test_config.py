"""Tests for settings resolution."""

import pytest

from stratspec.core.config import CompilerSettings, resolve_settings


def test_defaults() -> None:
    s = CompilerSettings()
    assert s.interval == "15m"
    assert s.bars_per_day == 96
    assert s.base_position_pct == 10.0
    assert s.kelly_cap_pct == 25.0


def test_resolve_uses_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRATSPEC_LOG_FORMAT", "JSON")
    monkeypatch.setenv("STRATSPEC_INTERVAL", "5m")
    s = resolve_settings()
    assert s.log_format == "json"
    assert s.interval == "5m"


def test_resolve_param_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRATSPEC_LOG_LEVEL", "debug")
    assert resolve_settings(log_level="warning").log_level == "WARNING"


def test_resolve_defaults_without_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STRATSPEC_INTERVAL", "STRATSPEC_LOG_LEVEL", "STRATSPEC_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    s = resolve_settings()
    assert s == CompilerSettings()
