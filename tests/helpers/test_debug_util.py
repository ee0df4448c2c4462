"""Tests for DebugUtil mode handling."""

import logging

import pytest

from helpers.debug_util import DEBUG_MODE_ENV_VAR, DebugUtil


def test_defaults_to_quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(DEBUG_MODE_ENV_VAR, raising=False)
    assert DebugUtil().debug_mode() == "quiet"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(DEBUG_MODE_ENV_VAR, "LOUD")
    assert DebugUtil().is_loud()


def test_invalid_mode_falls_back_to_quiet() -> None:
    util = DebugUtil("shouty")
    assert util.is_quiet()
    util.set_mode("loud")
    assert util.is_loud()
    util.set_mode("nope")
    assert util.is_quiet()


def test_loud_mode_prints(capsys: pytest.CaptureFixture[str]) -> None:
    DebugUtil("loud").debugMessage("hello", 42)
    assert capsys.readouterr().out == "[DEBUG] hello 42\n"


def test_quiet_mode_logs(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="DebugUtil"):
        DebugUtil("quiet").debugMessage("quiet message")
    assert "quiet message" in caplog.text
