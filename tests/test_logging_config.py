"""Tests for singleton logging configuration."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from sourcepick.logging_config import LOG_DATEFMT, LOG_FORMAT, setup_logging


@pytest.fixture(autouse=True)
def _reset_flags() -> None:
    """Reset singleton flag before each test."""
    import sourcepick.logging_config as mod

    mod._setup_done = False


def test_setup_logging_is_idempotent() -> None:
    """basicConfig runs once even when called twice."""
    with patch("sourcepick.logging_config.logging.basicConfig") as mock_bc:
        setup_logging()
        setup_logging("DEBUG")  # second call is no-op
        mock_bc.assert_called_once()


def test_level_and_format_passed() -> None:
    with patch("sourcepick.logging_config.logging.basicConfig") as mock_bc:
        setup_logging("debug")
    kwargs = mock_bc.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert kwargs["format"] == LOG_FORMAT
    assert kwargs["datefmt"] == LOG_DATEFMT


def test_format_carries_logger_name() -> None:
    assert "[%(name)s]" in LOG_FORMAT


def test_level_defaults_to_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCEPICK_LOG_LEVEL", "warning")
    with patch("sourcepick.logging_config.logging.basicConfig") as mock_bc:
        setup_logging()
    assert mock_bc.call_args.kwargs["level"] == logging.WARNING
