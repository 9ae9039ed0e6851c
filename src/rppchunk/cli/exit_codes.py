# topmark:header:start
#
#   project      : RppChunk
#   file         : exit_codes.py
#   file_relpath : src/rppchunk/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the RppChunk CLI.

The codes follow the BSD ``sysexits`` convention where practical, so that
scripts can tell failures apart. ``WOULD_CHANGE=2`` is the one deliberate
divergence: a dry run that would alter the chunk exits with 2 (Click's own
usage errors also use 2, so tests check ``result.exception`` as well).
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the RppChunk CLI.

    Attributes:
        SUCCESS: The command ran and nothing is pending.
        FAILURE: Generic failure (token or sub-chunk not found, check mismatch).
        WOULD_CHANGE: Dry run: the chunk would change with ``--apply``.
        USAGE_ERROR: Invalid arguments or operation parameters (``EX_USAGE``).
        DATA_ERROR: Undecodable, empty or malformed chunk (``EX_DATAERR``).
        FILE_NOT_FOUND: Input file does not exist (``EX_NOINPUT``).
        IO_ERROR: Reading or writing a file failed (``EX_IOERR``).
        PERMISSION_DENIED: Insufficient permissions (``EX_NOPERM``).
        CONFIG_ERROR: Missing or unusable configuration file (``EX_CONFIG``).
        UNEXPECTED_ERROR: Last-resort bucket for unknown failures.
    """

    SUCCESS = 0
    FAILURE = 1
    WOULD_CHANGE = 2  # divergence from sysexits, see module docstring

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
