# topmark:header:start
#
#   project      : RppChunk
#   file         : io.py
#   file_relpath : src/rppchunk/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reading and writing chunk files for the CLI.

``-`` designates STDIN for input. Files are read and written as UTF-8 with
newlines preserved, so that untouched lines keep their exact bytes.
"""

from __future__ import annotations

from pathlib import Path

import click

from rppchunk.cli.errors import (
    RppChunkDataError,
    RppChunkFileNotFoundError,
    RppChunkIOError,
    RppChunkPermissionDeniedError,
)
from rppchunk.config.logging import get_logger

logger = get_logger(__name__)

STDIN_MARKER: str = "-"


def is_stdin(file: str) -> bool:
    """Return True if ``file`` designates STDIN."""
    return file == STDIN_MARKER


def read_input(file: str) -> str:
    """Return the text of ``file`` (or of STDIN for ``-``).

    Raises:
        RppChunkFileNotFoundError: If the file does not exist.
        RppChunkPermissionDeniedError: If the file cannot be read.
        RppChunkDataError: If the content is not valid UTF-8.
        RppChunkIOError: For other read errors.
    """
    if is_stdin(file):
        logger.debug("Reading chunk from STDIN")
        return click.get_text_stream("stdin").read()

    path = Path(file)
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            text: str = fh.read()
    except FileNotFoundError as exc:
        raise RppChunkFileNotFoundError(f"File not found: {file}") from exc
    except PermissionError as exc:
        raise RppChunkPermissionDeniedError(f"Permission denied: {file}") from exc
    except UnicodeDecodeError as exc:
        raise RppChunkDataError(f"{file}: not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise RppChunkIOError(f"{file}: {exc.strerror or exc}") from exc
    logger.debug("Read %d chars from %s", len(text), path)
    return text


def write_output(file: str, text: str) -> None:
    """Write ``text`` to ``file`` in place.

    Raises:
        RppChunkPermissionDeniedError: If the file cannot be written.
        RppChunkIOError: For other write errors.
    """
    path = Path(file)
    try:
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    except PermissionError as exc:
        raise RppChunkPermissionDeniedError(f"Permission denied: {file}") from exc
    except OSError as exc:
        raise RppChunkIOError(f"{file}: {exc.strerror or exc}") from exc
    logger.debug("Wrote %d chars to %s", len(text), path)
