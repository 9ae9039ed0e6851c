# topmark:header:start
#
#   project      : RppChunk
#   file         : logging.py
#   file_relpath : src/rppchunk/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RppChunk logging with an extra TRACE level.

The scan engine can emit one record per parsed line; those records use the
TRACE level (below DEBUG) so that DEBUG stays readable on multi-megabyte chunks.

`setup_logging` installs one colored handler on the ``rppchunk`` package
logger, writing to ``stderr`` because ``stdout`` carries chunk text for the
CLI. Records still propagate, so applications and pytest's ``caplog`` see them.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from rppchunk.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

PACKAGE_LOGGER_NAME: Final[str] = "rppchunk"

LOG_FORMAT: Final[str] = "rppchunk: %(levelname)s: %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "rppchunk: %(levelname)s: %(name)s:%(lineno)d: %(message)s"

# Marks the handler installed by setup_logging so a later call replaces it
_HANDLER_TAG: Final[str] = "_rppchunk_handler"


class RppChunkLogger(logging.Logger):
    """Logger class with a `trace` method."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level.

        Args:
            msg (object): The message format.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(RppChunkLogger)

_LEVEL_ALIASES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "WARN": logging.WARNING,
    "FATAL": logging.CRITICAL,
}

# Lowest level first; a record takes the color of the highest threshold it reaches
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (TRACE_LEVEL, chalk.blue),
    (logging.DEBUG, chalk.gray),
    (logging.INFO, chalk.green),
    (logging.WARNING, chalk.yellow),
    (logging.ERROR, chalk.red),
    (logging.CRITICAL, chalk.red_bright),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors whole records by severity."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        color: Callable[[str], str] = chalk.dim
        for threshold, level_color in _LEVEL_COLORS:
            if record.levelno < threshold:
                break
            color = level_color
        return color(message)


def parse_log_level(value: str | None) -> int | None:
    """Translate a level name ("TRACE", "debug") or number ("10") into a logging level.

    Args:
        value (str | None): Raw level text.

    Returns:
        int | None: The logging level, or ``None`` when ``value`` is empty or unknown.
    """
    text: str = (value or "").strip().upper()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    if text in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[text]
    level: object = logging.getLevelName(text)
    return level if isinstance(level, int) else None


def resolve_env_log_level() -> int | None:
    """Return the level named by ``RPPCHUNK_LOG_LEVEL``, or None if unset or unknown."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))


def setup_logging(level: int | None = None) -> None:
    """Send ``rppchunk`` records at ``level`` and above to ``stderr``, colored.

    Without ``level`` the environment is consulted; when it is silent only
    CRITICAL records are shown. Calling again replaces the previous handler.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    package_logger: logging.Logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    for old in [h for h in package_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        package_logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    setattr(handler, _HANDLER_TAG, True)
    package_logger.addHandler(handler)


def get_logger(name: str) -> RppChunkLogger:
    """Return the `RppChunkLogger` called ``name`` (use ``__name__``)."""
    return cast("RppChunkLogger", logging.getLogger(name))
