# topmark:header:start
#
#   project      : RppChunk
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for log level parsing and the TRACE level."""

from __future__ import annotations

import logging

import pytest

from rppchunk.config.logging import (
    TRACE_LEVEL,
    RppChunkLogger,
    get_logger,
    parse_log_level,
    resolve_env_log_level,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("trace", TRACE_LEVEL),
        (" Debug ", logging.DEBUG),
        ("warn", logging.WARNING),
        ("40", 40),
        ("", None),
        (None, None),
        ("loud", None),
    ],
)
def test_parse_log_level(raw: str | None, expected: int | None) -> None:
    """Names are case-insensitive; numbers are taken as is."""
    assert parse_log_level(raw) == expected


def test_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """The environment variable selects the internal log level."""
    assert resolve_env_log_level() is None
    monkeypatch.setenv("RPPCHUNK_LOG_LEVEL", "error")
    assert resolve_env_log_level() == logging.ERROR


def test_trace_logging(caplog: pytest.LogCaptureFixture) -> None:
    """Loggers support the TRACE level."""
    logger = get_logger("rppchunk.tests.trace")
    assert isinstance(logger, RppChunkLogger)
    with caplog.at_level(TRACE_LEVEL, logger="rppchunk.tests.trace"):
        logger.trace("tracing %d", 42)
    assert "tracing 42" in caplog.text
