"""Unit tests for console output helpers."""

from __future__ import annotations

import pytest

from olog.utils import output


@pytest.fixture(autouse=True)
def quiet_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(output, "_verbose_enabled", False)
    monkeypatch.setattr(output, "_debug_enabled", False)


def test_debug_is_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    output.debug("hidden")
    assert "hidden" not in capsys.readouterr().err


def test_debug_prints_to_stderr(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(output, "_debug_enabled", True)
    output.debug("params ready")
    captured = capsys.readouterr()
    assert "[DEBUG] params ready" in captured.err
    assert captured.out == ""


def test_verbose_does_not_enable_debug(capsys: pytest.CaptureFixture[str]) -> None:
    output.set_verbosity(verbose=True)
    output.verbose("criteria")
    output.debug("hidden")
    captured = capsys.readouterr()
    assert "criteria" in captured.out
    assert "hidden" not in captured.err
